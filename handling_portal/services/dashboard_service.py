import csv
import io
from dataclasses import dataclass, asdict
from datetime import date

from sqlalchemy import or_
from sqlalchemy.orm import Session

from handling_portal.models.handling_booking import HandlingBooking
from handling_portal.models.payment import Payment
from handling_portal.services.discount_service import Discount, MembershipDiscount, apply_discount, apply_membership
from handling_portal.services.formatting import format_currency, format_date
from handling_portal.services.travel_selection import travel_type_labels
from handling_portal.services.wallet_service import clean

ORDER_STATUSES = ("pending", "confirmed", "cancelled", "completed")

CSV_HEADERS = [
    "ID Pesanan",
    "Nama Customer",
    "Type Travel",
    "Passenger",
    "Payment Method",
    "Payment Status",
    "Basic Price",
    "Total",
    "Status",
    "Tanggal Dibuat",
    "Tanggal Keberangkatan",
]

PAYMENT_STATUS_LABELS = {"completed": "Lunas", "confirmed": "Dibayar"}
STATUS_LABELS = {"pending": "Menunggu", "confirmed": "Dikonfirmasi", "cancelled": "Dibatalkan"}

# dashboard filter value -> stored payment_method
PAYMENT_FILTERS = {"cash": "cash", "bank_transfer": "bank_transfer", "saldo": "use_saldo"}


@dataclass
class OrderRow:
    id: str
    package_name: str
    customer_name: str
    departure_date: str
    pickup_time: str
    payment_method: str
    status: str
    total_amount: int
    participants: int
    created_at: str
    basic_price: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


def to_order(b: HandlingBooking) -> OrderRow:
    category = clean(b.category, "Layanan")
    travel_type = clean(b.travel_type)
    return OrderRow(
        id=b.code_booking or b.id,
        package_name=" - ".join(p for p in (category, travel_type) if p),
        customer_name=b.customer_name or "",
        departure_date=b.pickup_date or "",
        pickup_time=b.pickup_time or "",
        payment_method=b.payment_method or "N/A",
        status=b.status if b.status in ORDER_STATUSES else "pending",
        total_amount=int(b.total_price or 0),
        participants=int(b.passengers or 1),
        created_at=b.created_at.isoformat() if b.created_at else "",
        basic_price=int(b.price or 0),
    )


def list_orders(db: Session, user_id: str) -> list[OrderRow]:
    rows = (
        db.query(HandlingBooking)
        .filter(HandlingBooking.user_id == user_id)
        .order_by(HandlingBooking.created_at.desc())
        .all()
    )
    return [to_order(b) for b in rows]


def filter_orders(orders: list[OrderRow], code: str = "", payment_method: str = "", status: str = "") -> list[OrderRow]:
    out = list(orders)
    needle = (code or "").strip().lower()
    if needle:
        out = [o for o in out if needle in o.id.lower()]
    if payment_method:
        wanted = PAYMENT_FILTERS.get(payment_method)
        if wanted:
            out = [o for o in out if (o.payment_method or "").lower() == wanted]
    if status:
        out = [o for o in out if o.status == status]
    return out


def summarize(orders: list[OrderRow]) -> dict:
    counts = {s: 0 for s in ORDER_STATUSES}
    for o in orders:
        counts[o.status] = counts.get(o.status, 0) + 1
    return {"total": len(orders), **counts}


def _payment_status_label(status: str) -> str:
    return PAYMENT_STATUS_LABELS.get(status, "Belum Bayar")


def _status_label(status: str) -> str:
    return STATUS_LABELS.get(status, "Selesai")


def export_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"booking-data-{today.isoformat()}.csv"


def export_csv(orders: list[OrderRow]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buf.write(",".join(CSV_HEADERS) + "\n")
    for o in orders:
        writer.writerow([
            o.id,
            o.customer_name,
            o.package_name,
            f"{o.participants} orang",
            o.payment_method or "N/A",
            _payment_status_label(o.status),
            format_currency(o.basic_price),
            format_currency(o.total_amount),
            _status_label(o.status),
            format_date(o.created_at),
            format_date(o.departure_date),
        ])
    return buf.getvalue()


def get_order(db: Session, user_id: str, code: str) -> HandlingBooking | None:
    return (
        db.query(HandlingBooking)
        .filter(HandlingBooking.user_id == user_id)
        .filter(or_(HandlingBooking.code_booking == code, HandlingBooking.id == code))
        .first()
    )


def invoice(db: Session, b: HandlingBooking) -> dict:
    """Invoice figures for one booking, rebuilt from what was stored at submit time.

    The membership percentage comes off first, then the flat per-passenger amount,
    capped at what is left.
    """
    passengers = int(b.passengers or 1)
    basic_price = int(b.price or 0)
    original = int(b.original_total or 0) or basic_price * passengers

    pct = float(b.member_discount or 0)
    member = apply_membership(original, MembershipDiscount(percentage=pct, active=pct > 0))
    per_passenger = int(b.user_discount or 0)
    agent = apply_discount(member.payable_total, Discount(value=per_passenger, active=per_passenger > 0), passengers)

    payment = (
        db.query(Payment)
        .filter(Payment.booking_id == b.id)
        .order_by(Payment.created_at.desc())
        .first()
    )
    return {
        "id": b.code_booking or b.id,
        "customerName": b.customer_name or "",
        "customerEmail": b.customer_email or "",
        "customerPhone": b.customer_phone or "",
        "companyName": b.company_name or "",
        "category": clean(b.category, "Layanan"),
        "travelType": b.travel_type or "",
        "travelTypeLabel": travel_type_labels(b.travel_type),
        "flightNumber": b.flight_number or "",
        "pickupArea": b.pickup_area or "",
        "dropoffArea": b.dropoff_area or "",
        "pickupDate": b.pickup_date or "",
        "pickupTime": b.pickup_time or "",
        "passengers": passengers,
        "additionalBaggage": b.additional_baggage or "",
        "notes": b.additional_notes or "",
        "basicPrice": basic_price,
        "originalTotal": original,
        "memberDiscountPercentage": pct,
        "memberDiscountAmount": member.discount_amount,
        "userDiscountPerPassenger": per_passenger,
        "userDiscountAmount": agent.discount_amount,
        "totalDiscount": member.discount_amount + agent.discount_amount,
        "totalAmount": agent.payable_total,
        "paymentMethod": b.payment_method or "N/A",
        "paymentStatus": (payment.payment_status if payment else None) or b.payment_status or "pending",
        "bankName": (payment.bank_name if payment else None) or b.bank_name or "",
        "status": b.status if b.status in ORDER_STATUSES else "pending",
        "createdAt": b.created_at.isoformat() if b.created_at else "",
    }
