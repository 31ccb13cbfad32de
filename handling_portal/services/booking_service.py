import logging
import random
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from handling_portal.models.handling_booking import HandlingBooking
from handling_portal.models.payment import Payment, PaymentBooking
from handling_portal.models.payment_method import PaymentMethod
from handling_portal.models.user import User
from handling_portal.schemas.booking import GroupBookingDraft, PaymentIn
from handling_portal.services.agent_session import AgentSession
from handling_portal.services.discount_service import Quote, quote
from handling_portal.services.payment_gate import (
    PaymentGate, PaymentMethodKind, SELECT_BANK_MESSAGE, insufficient_saldo_message,
)
from handling_portal.services.pricing_service import PriceBreakdown, PriceTable, calculate_price, load_price_table
from handling_portal.services.wallet_service import debit_for_booking

log = logging.getLogger(__name__)

GROUP_CATEGORY = "Handling Group"
PAYMENT_STATUS_PAID = "Paid"
PAYMENT_STATUS_AWAITING = "tunggu konfirmasi Admin"


class BookingValidationError(ValueError):
    pass


class PaymentSelectionError(BookingValidationError):
    pass


class InsufficientSaldoError(PaymentSelectionError):
    pass


@dataclass
class PricedDraft:
    table: PriceTable
    breakdown: PriceBreakdown
    quote: Quote


def make_booking_code(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"HSA-{now:%Y%m%d}-{now:%H%M%S}-{random.randint(0, 999):03d}"


def price_draft(db: Session, session: AgentSession, draft: GroupBookingDraft, table: PriceTable | None = None) -> PricedDraft:
    table = table or load_price_table(db)
    breakdown = calculate_price(table, draft.travelTypes, draft.passengers, draft.additionalBaggage)
    q = quote(breakdown.subtotal, draft.passengers, session.discount, session.membership)
    return PricedDraft(table=table, breakdown=breakdown, quote=q)


def _allocate_code(db: Session) -> str:
    for _ in range(10):
        code = make_booking_code()
        if not db.query(HandlingBooking).filter(HandlingBooking.code_booking == code).first():
            return code
    raise BookingValidationError("could not allocate booking code")


def submit_group_booking(db: Session, session: AgentSession, draft: GroupBookingDraft, payment: PaymentIn) -> tuple[HandlingBooking, PricedDraft]:
    """Price, validate payment, and persist a group booking with its payment rows.

    Everything is written in one transaction. If any write fails (saldo debit
    included) nothing is kept and the error propagates.
    """
    priced = price_draft(db, session, draft)
    payable = priced.quote.payable_total

    # lock the wallet row so concurrent saldo bookings can't both pass the balance check
    user = db.execute(
        select(User).where(User.id == session.user_id).with_for_update().execution_options(populate_existing=True)
    ).scalar_one_or_none()
    if not user:
        raise BookingValidationError("user not found")

    gate = PaymentGate(balance=user.saldo or 0, payable_total=payable)
    if payment.method is not None and not gate.choose(payment.method):
        raise InsufficientSaldoError(insufficient_saldo_message(gate.balance, payable))
    gate.choose_bank(payment.bankMethodId)
    err = gate.validate()
    if err:
        raise PaymentSelectionError(err)

    bank = None
    if gate.method is PaymentMethodKind.BANK_TRANSFER:
        bank = db.get(PaymentMethod, gate.bank_id)
        if not bank or not bank.is_active:
            raise PaymentSelectionError(SELECT_BANK_MESSAGE)
    bank_name = (bank.name or bank.bank_name) if bank else None

    settled = gate.method in (PaymentMethodKind.CASH, PaymentMethodKind.USE_SALDO)
    code = _allocate_code(db)
    booking_id = str(uuid.uuid4())
    now = datetime.now(timezone.utc)

    try:
        booking = HandlingBooking(
            id=booking_id,
            code_booking=code,
            user_id=user.id,
            category=GROUP_CATEGORY,
            customer_name=draft.fullName,
            customer_email=draft.email,
            customer_phone=draft.phone,
            company_name=draft.companyName,
            travel_type=", ".join(t.value for t in draft.travelTypes),
            pickup_area=draft.pickupArea or None,
            dropoff_area=draft.dropoffArea or None,
            passenger_area=draft.pickupArea or None,
            flight_number=draft.flightNumber,
            pickup_date=draft.pickupDate,
            pickup_time=draft.pickupTime,
            passengers=draft.passengers,
            additional_notes=draft.notes or None,
            price=priced.breakdown.service_unit,
            original_total=priced.quote.original_total,
            total_amount=payable,
            total_price=payable,
            member_discount=session.membership.percentage if session.membership.active else None,
            user_discount=int(session.discount.value) if session.discount.active else None,
            additional_baggage=priced.breakdown.baggage_descriptor(),
            payment_method=gate.method.value,
            payment_id=gate.bank_id,
            bank_name=bank_name,
            status="confirmed" if gate.method is PaymentMethodKind.USE_SALDO else "pending",
            payment_status=PAYMENT_STATUS_PAID if settled else PAYMENT_STATUS_AWAITING,
            created_at=now,
        )
        db.add(booking)

        if gate.method is PaymentMethodKind.USE_SALDO:
            debit_for_booking(db, user, code, payable, GROUP_CATEGORY)

        db.add(Payment(
            id=str(uuid.uuid4()),
            user_id=user.id,
            booking_id=booking_id,
            code_booking=code,
            payment_method=gate.method.value,
            amount=priced.breakdown.service_unit,
            paid_amount=payable,
            status="auto paid" if settled else "pending",
            payment_status="completed" if settled else "pending",
            bank_name=bank_name,
            created_at=now,
        ))
        db.add(PaymentBooking(
            id=str(uuid.uuid4()),
            booking_id=booking_id,
            code_booking=code,
            booking_type="handling",
            created_at=now,
        ))
        db.commit()
    except Exception:
        db.rollback()
        log.exception("group booking write failed", extra={"user_id": session.user_id, "code_booking": code})
        raise

    db.refresh(booking)
    log.info("group booking created", extra={
        "user_id": user.id, "code_booking": code, "payment_method": gate.method.value,
        "passengers": draft.passengers, "total": payable,
    })
    return booking, priced
