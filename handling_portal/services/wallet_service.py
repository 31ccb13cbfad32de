import logging
import random
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from handling_portal.core.config import settings
from handling_portal.models.handling_booking import HandlingBooking
from handling_portal.models.payment_method import PaymentMethod
from handling_portal.models.topup_request import TopUpRequest
from handling_portal.models.transaction import TransactionHistory
from handling_portal.models.user import User
from handling_portal.schemas.wallet import TopUpForm
from handling_portal.services.backend_client import BackendClient, UploadedDocument, store_public_document
from handling_portal.services.payment_gate import PaymentMethodKind

log = logging.getLogger(__name__)

TOPUP_REQUEST_KIND = "Topup Agent Request"
BOOKING_PAYMENT_KIND = "Pembayaran Booking"


class TopUpValidationError(ValueError):
    pass


def clean(v, fallback: str = "") -> str:
    """Blank-ish values ('', 'undefined', 'null', None) collapse to `fallback`."""
    if v is None:
        return fallback
    s = str(v).strip()
    return fallback if s.lower() in ("", "undefined", "null") else s


def resulting_balance(start: int, nominal: int, kind: str | None) -> int:
    if kind == TOPUP_REQUEST_KIND:
        # requests move no money until an operator approves them
        return start
    if nominal > 0 and kind and "topup" in kind.lower():
        return start + abs(nominal)
    return start - abs(nominal)


def latest_balance(db: Session, user_id: str) -> int:
    last = (
        db.query(TransactionHistory)
        .filter(TransactionHistory.user_id == user_id)
        .order_by(TransactionHistory.trans_date.desc())
        .first()
    )
    return int(last.balance_after or 0) if last else 0


def append_entry(db: Session, *, user_id: str, code: str | None, nominal: int, balance_after: int,
                 description: str, kind: str | None = None, status: str | None = None) -> TransactionHistory:
    entry = TransactionHistory(
        id=str(uuid.uuid4()),
        user_id=user_id,
        code_booking=code,
        nominal=nominal,
        balance_after=balance_after,
        description=description,
        kind=kind,
        status=status,
        trans_date=datetime.now(timezone.utc),
    )
    db.add(entry)
    db.flush()
    return entry


def record_transaction(db: Session, user: User, code: str, nominal: int, description: str,
                       kind: str, status: str | None = None) -> int:
    """Append a ledger row continuing from the last recorded balance. Caller commits."""
    end = resulting_balance(latest_balance(db, user.id), nominal, kind)
    append_entry(db, user_id=user.id, code=code, nominal=nominal, balance_after=end,
                 description=description, kind=kind, status=status)
    if kind != TOPUP_REQUEST_KIND:
        user.saldo = end
    return end


def debit_for_booking(db: Session, user: User, code: str, amount: int, category: str) -> int:
    """Take `amount` from the wallet for a booking. Caller holds the row lock and commits."""
    balance = int(user.saldo or 0)
    if balance < amount:
        raise ValueError("saldo would go negative")
    new_balance = balance - amount
    user.saldo = new_balance
    append_entry(db, user_id=user.id, code=code, nominal=-amount, balance_after=new_balance,
                 description=f"Pembayaran booking {code} - {category}", kind=BOOKING_PAYMENT_KIND)
    log.info("saldo debited", extra={"user_id": user.id, "code_booking": code, "amount": amount, "saldo": new_balance})
    return new_balance


def make_topup_reference(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"TOP-AR-{now:%Y%m%d}-{now:%H%M%S}-{random.randint(0, 9999):04d}"


def validate_topup(form: TopUpForm, proof: UploadedDocument | None) -> None:
    if form.amount < settings.MIN_TOPUP_AMOUNT:
        raise TopUpValidationError(f"Minimal top up Rp {settings.MIN_TOPUP_AMOUNT:,}".replace(",", "."))
    if form.paymentMethod is PaymentMethodKind.USE_SALDO:
        raise TopUpValidationError("Saldo tidak dapat digunakan untuk top up")
    if form.paymentMethod is PaymentMethodKind.BANK_TRANSFER and not form.bankMethodId:
        raise TopUpValidationError("Silakan pilih bank tujuan transfer")
    if not (form.senderName.strip() and form.senderBank.strip() and form.senderAccount.strip()):
        raise TopUpValidationError("Lengkapi data pengirim")
    if proof is None or not proof.content:
        raise TopUpValidationError("Bukti transfer diperlukan")


def request_topup(db: Session, client: BackendClient, user: User, form: TopUpForm,
                  proof: UploadedDocument | None) -> TopUpRequest:
    validate_topup(form, proof)

    bank = None
    if form.paymentMethod is PaymentMethodKind.BANK_TRANSFER:
        bank = db.get(PaymentMethod, form.bankMethodId)
        if not bank or not bank.is_active:
            raise TopUpValidationError("Silakan pilih bank tujuan transfer")

    for _ in range(10):
        ref = make_topup_reference()
        if not db.query(TopUpRequest).filter(TopUpRequest.reference_no == ref).first():
            break
    else:
        raise TopUpValidationError("could not allocate top up reference")

    try:
        proof_url = store_public_document(client, settings.TRANSFER_PROOF_BUCKET, f"{user.id}/{ref}", proof)
    except ValueError as e:
        raise TopUpValidationError(str(e))

    req = TopUpRequest(
        id=str(uuid.uuid4()),
        user_id=user.id,
        reference_no=ref,
        amount=form.amount,
        sender_name=form.senderName.strip(),
        sender_bank=form.senderBank.strip(),
        sender_account=form.senderAccount.strip(),
        payment_method=form.paymentMethod.value,
        bank_name=(bank.bank_name or bank.name) if bank else "",
        destination_account=bank.account_number if bank else "",
        account_holder_received=bank.account_holder if bank else None,
        note=form.note or None,
        proof_url=proof_url,
        status="pending",
        request_by_role=user.role,
    )
    db.add(req)
    record_transaction(db, user, ref, form.amount, f"Request top up saldo - {ref}", TOPUP_REQUEST_KIND, status="pending")
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    log.info("top up requested", extra={"user_id": user.id, "reference_no": ref, "amount": form.amount})
    return req


def describe_transaction(entry: TransactionHistory, categories: dict[str, str]) -> str:
    """UI label for a ledger row. `categories` maps booking code -> booking category."""
    code = clean(entry.code_booking)
    kind = entry.kind or ""
    if code.startswith("TOP-AR-") or (code.startswith("TOP-") and kind == TOPUP_REQUEST_KIND):
        return f"Request top up saldo - {code}"
    if entry.nominal > 0 and "topup" in kind.lower():
        return f"Top up saldo - {code or 'N/A'}"
    if code and not code.startswith("TOP"):
        return f"Pembayaran booking {code} - {categories.get(code) or 'Handling Group'}"
    return "Top up saldo" if entry.nominal > 0 else "Pembayaran"


def transaction_history(db: Session, user_id: str) -> list[dict]:
    """Ledger rows newest first, without rows that belong to still-pending top up requests."""
    rows = (
        db.query(TransactionHistory)
        .filter(TransactionHistory.user_id == user_id)
        .order_by(TransactionHistory.trans_date.desc())
        .all()
    )
    pending_refs = {
        r.reference_no for r in
        db.query(TopUpRequest.reference_no).filter(TopUpRequest.user_id == user_id, TopUpRequest.status == "pending").all()
    }
    categories = {
        b.code_booking: clean(b.category, "Handling Group") for b in
        db.query(HandlingBooking.code_booking, HandlingBooking.category).filter(HandlingBooking.user_id == user_id).all()
    }
    out = []
    for t in rows:
        code = clean(t.code_booking)
        if code and code in pending_refs:
            continue
        out.append({
            "id": t.id,
            "codeBooking": code,
            "nominal": t.nominal,
            "saldoAkhir": t.balance_after,
            "description": describe_transaction(t, categories),
            "kind": t.kind,
            "status": t.status,
            "transDate": t.trans_date.isoformat() if t.trans_date else None,
        })
    return out
