from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from handling_portal.db.session import Base

class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    booking_id: Mapped[str] = mapped_column(String(36), index=True)
    code_booking: Mapped[str] = mapped_column(String(40), index=True)
    payment_method: Mapped[str] = mapped_column(String(20))
    amount: Mapped[int] = mapped_column(Integer, default=0)       # service unit price
    paid_amount: Mapped[int] = mapped_column(Integer, default=0)  # payable total
    status: Mapped[str] = mapped_column(String(20), default="pending")          # pending, auto paid
    payment_status: Mapped[str] = mapped_column(String(20), default="pending")  # pending, completed
    bank_name: Mapped[str] = mapped_column(String(120), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class PaymentBooking(Base):
    __tablename__ = "payment_bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    booking_id: Mapped[str] = mapped_column(String(36), index=True)
    code_booking: Mapped[str] = mapped_column(String(40))
    booking_type: Mapped[str] = mapped_column(String(20), default="handling")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
