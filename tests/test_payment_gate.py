from handling_portal.services.payment_gate import (
    PaymentGate, PaymentMethodKind, SELECT_BANK_MESSAGE, SELECT_METHOD_MESSAGE, insufficient_saldo_message,
)


def test_nothing_chosen():
    gate = PaymentGate(balance=0, payable_total=105000)
    assert gate.validate() == SELECT_METHOD_MESSAGE
    assert not gate.can_submit


def test_saldo_rejected_when_balance_short():
    gate = PaymentGate(balance=100000, payable_total=105000)
    assert not gate.saldo_allowed
    assert gate.choose(PaymentMethodKind.USE_SALDO) is False
    assert gate.method is None


def test_saldo_rejection_keeps_previous_choice():
    gate = PaymentGate(balance=100000, payable_total=105000)
    gate.choose("cash")
    assert gate.choose("use_saldo") is False
    assert gate.method is PaymentMethodKind.CASH


def test_saldo_accepted_when_balance_covers_total():
    gate = PaymentGate(balance=105000, payable_total=105000)
    assert gate.choose("use_saldo")
    assert gate.validate() is None


def test_bank_transfer_needs_bank():
    gate = PaymentGate(balance=0, payable_total=50000)
    gate.choose("bank_transfer")
    assert gate.validate() == SELECT_BANK_MESSAGE
    assert gate.choose_bank("bank-1")
    assert gate.can_submit


def test_switching_away_from_transfer_clears_bank():
    gate = PaymentGate(balance=0, payable_total=50000)
    gate.choose("bank_transfer")
    gate.choose_bank("bank-1")
    gate.choose("cash")
    assert gate.bank_id is None
    assert not gate.choose_bank("bank-1")


def test_insufficient_message_mentions_both_amounts():
    msg = insufficient_saldo_message(100000, 105000)
    assert "100.000" in msg and "105.000" in msg
