from sqlalchemy import String, Integer, Float, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from handling_portal.db.session import Base

class HandlingBooking(Base):
    __tablename__ = "handling_bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # booking uuid, shared with payments
    code_booking: Mapped[str] = mapped_column(String(40), unique=True, index=True)  # HSA-YYYYMMDD-HHMMSS-NNN
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    category: Mapped[str] = mapped_column(String(60), default="Handling Group")

    customer_name: Mapped[str] = mapped_column(String(200), default="")
    customer_email: Mapped[str] = mapped_column(String(320), default="")
    customer_phone: Mapped[str] = mapped_column(String(40), default="")
    company_name: Mapped[str] = mapped_column(String(200), default="")

    travel_type: Mapped[str] = mapped_column(String(60), default="")  # "arrival, departure"
    pickup_area: Mapped[str] = mapped_column(String(200), nullable=True)
    dropoff_area: Mapped[str] = mapped_column(String(200), nullable=True)
    passenger_area: Mapped[str] = mapped_column(String(200), nullable=True)
    flight_number: Mapped[str] = mapped_column(String(30), default="")
    pickup_date: Mapped[str] = mapped_column(String(10), default="")  # YYYY-MM-DD
    pickup_time: Mapped[str] = mapped_column(String(5), default="")   # HH:MM
    passengers: Mapped[int] = mapped_column(Integer, default=1)
    additional_notes: Mapped[str] = mapped_column(Text, nullable=True)

    price: Mapped[int] = mapped_column(Integer, default=0)          # service unit price per passenger
    original_total: Mapped[int] = mapped_column("harga_asli", Integer, default=0)
    total_amount: Mapped[int] = mapped_column(Integer, default=0)   # payable after discounts
    total_price: Mapped[int] = mapped_column(Integer, default=0)
    member_discount: Mapped[float] = mapped_column(Float, nullable=True)  # percentage used
    user_discount: Mapped[int] = mapped_column(Integer, nullable=True)    # per passenger amount used
    additional_baggage: Mapped[str] = mapped_column("bagasi_tambahan", String(60), nullable=True)  # "<qty> x <unit>"

    payment_method: Mapped[str] = mapped_column(String(20), default="")  # cash, bank_transfer, use_saldo
    payment_id: Mapped[str] = mapped_column(String(36), nullable=True)   # chosen bank method
    bank_name: Mapped[str] = mapped_column(String(120), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending, confirmed, cancelled, completed
    payment_status: Mapped[str] = mapped_column(String(40), default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
