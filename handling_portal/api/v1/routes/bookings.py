from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from handling_portal.db.session import get_db
from handling_portal.api.deps import get_agent_session
from handling_portal.models.location import Country
from handling_portal.models.payment_method import PaymentMethod
from handling_portal.schemas.booking import (
    GroupBookingDraft, GroupBookingOut, GroupBookingSubmit, QuoteOut, SelectionIn, SelectionOut,
)
from handling_portal.services.agent_session import AgentSession
from handling_portal.services.booking_service import (
    BookingValidationError, InsufficientSaldoError, price_draft, submit_group_booking,
)
from handling_portal.services.payment_gate import PaymentGate
from handling_portal.services.travel_selection import SelectionState, needs_dropoff, needs_pickup

router = APIRouter(tags=["bookings"])


@router.post("/booking/group/travel-types", response_model=SelectionOut)
def toggle_travel_type(body: SelectionIn):
    state = SelectionState(
        selected=tuple(dict.fromkeys(body.travelTypes)),
        pickup_area=body.pickupArea,
        dropoff_area=body.dropoffArea,
    ).toggle(body.toggle, body.checked)
    return SelectionOut(
        state=state.name,
        travelTypes=list(state.selected),
        pickupArea=state.pickup_area,
        dropoffArea=state.dropoff_area,
        needsPickup=needs_pickup(state.selected),
        needsDropoff=needs_dropoff(state.selected),
    )


@router.get("/booking/group/options")
def booking_options(db: Session = Depends(get_db), session: AgentSession = Depends(get_agent_session)):
    banks = (
        db.query(PaymentMethod)
        .filter(PaymentMethod.is_active == True, PaymentMethod.type == "manual")
        .order_by(PaymentMethod.name)
        .all()
    )
    countries = db.query(Country).order_by(Country.name).all()
    return {
        "bankMethods": [
            {"id": b.id, "name": b.name, "bankName": b.bank_name,
             "accountHolder": b.account_holder, "accountNumber": b.account_number}
            for b in banks
        ],
        "countries": [{"code": c.code, "name": c.name} for c in countries],
        "saldo": session.saldo,
    }


@router.post("/booking/group/quote", response_model=QuoteOut)
def quote_group_booking(body: GroupBookingDraft, db: Session = Depends(get_db),
                        session: AgentSession = Depends(get_agent_session)):
    priced = price_draft(db, session, body)
    q = priced.quote
    gate = PaymentGate(balance=session.saldo, payable_total=q.payable_total)
    return QuoteOut(
        travelTypes=body.travelTypes,
        serviceUnitPrice=priced.breakdown.service_unit,
        baggageUnitPrice=priced.breakdown.baggage_unit,
        serviceTotal=priced.breakdown.service_total,
        baggageTotal=priced.breakdown.baggage_total,
        originalTotal=q.original_total,
        membershipDiscountPercentage=session.membership.percentage if session.membership.active else 0,
        membershipDiscountAmount=q.membership_amount,
        agentDiscountPerPassenger=int(session.discount.value) if session.discount.active else 0,
        agentDiscountAmount=q.agent_discount_amount,
        totalPayable=q.payable_total,
        saldo=session.saldo,
        saldoAllowed=gate.saldo_allowed,
        priceFallback=priced.table.is_fallback,
    )


@router.post("/booking/group", response_model=GroupBookingOut)
def create_group_booking(body: GroupBookingSubmit, db: Session = Depends(get_db),
                         session: AgentSession = Depends(get_agent_session)):
    try:
        booking, priced = submit_group_booking(db, session, body.draft, body.payment)
    except InsufficientSaldoError as e:
        raise HTTPException(status_code=402, detail=str(e))
    except BookingValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.refresh(session.user)
    return GroupBookingOut(
        bookingId=booking.id,
        bookingCode=booking.code_booking,
        status=booking.status,
        paymentStatus=booking.payment_status,
        paymentMethod=booking.payment_method,
        bankName=booking.bank_name,
        originalTotal=priced.quote.original_total,
        totalPayable=priced.quote.payable_total,
        saldo=int(session.user.saldo or 0),
    )
