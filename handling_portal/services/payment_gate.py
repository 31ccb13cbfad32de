from enum import Enum

from handling_portal.services.formatting import format_currency


class PaymentMethodKind(str, Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    USE_SALDO = "use_saldo"


SELECT_METHOD_MESSAGE = "Silakan pilih metode pembayaran"
SELECT_BANK_MESSAGE = "Silakan pilih bank untuk transfer"


def insufficient_saldo_message(balance: int, payable_total: int) -> str:
    return (
        f"Saldo tidak mencukupi. Saldo Anda: {format_currency(balance)}, "
        f"Total pembayaran: {format_currency(payable_total)}"
    )


class PaymentGate:
    """Payment step of the booking wizard.

    Saldo can only be chosen when the wallet covers the payable total; otherwise the
    choice is ignored and the previous method stays. Bank transfer needs a bank
    before the booking can be submitted.
    """

    def __init__(self, balance: int, payable_total: int):
        self.balance = int(balance or 0)
        self.payable_total = int(payable_total)
        self.method: PaymentMethodKind | None = None
        self.bank_id: str | None = None

    @property
    def saldo_allowed(self) -> bool:
        return self.balance >= self.payable_total

    def choose(self, method: PaymentMethodKind | str) -> bool:
        method = PaymentMethodKind(method)
        if method is PaymentMethodKind.USE_SALDO and not self.saldo_allowed:
            return False
        if method is not PaymentMethodKind.BANK_TRANSFER:
            self.bank_id = None
        self.method = method
        return True

    def choose_bank(self, bank_id: str | None) -> bool:
        if self.method is not PaymentMethodKind.BANK_TRANSFER:
            return False
        self.bank_id = bank_id or None
        return True

    def validate(self) -> str | None:
        if self.method is None:
            return SELECT_METHOD_MESSAGE
        if self.method is PaymentMethodKind.BANK_TRANSFER and not self.bank_id:
            return SELECT_BANK_MESSAGE
        if self.method is PaymentMethodKind.USE_SALDO and not self.saldo_allowed:
            return insufficient_saldo_message(self.balance, self.payable_total)
        return None

    @property
    def can_submit(self) -> bool:
        return self.validate() is None
