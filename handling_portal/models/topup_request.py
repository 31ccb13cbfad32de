from sqlalchemy import String, Integer, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from handling_portal.db.session import Base

class TopUpRequest(Base):
    __tablename__ = "topup_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    reference_no: Mapped[str] = mapped_column(String(40), unique=True, index=True)  # TOP-AR-YYYYMMDD-HHMMSS-NNNN
    amount: Mapped[int] = mapped_column(Integer)
    sender_name: Mapped[str] = mapped_column(String(200))
    sender_bank: Mapped[str] = mapped_column(String(120))
    sender_account: Mapped[str] = mapped_column(String(60))
    payment_method: Mapped[str] = mapped_column(String(20))
    bank_name: Mapped[str] = mapped_column(String(120), default="")
    destination_account: Mapped[str] = mapped_column(String(60), default="")
    account_holder_received: Mapped[str] = mapped_column(String(200), nullable=True)
    note: Mapped[str] = mapped_column(Text, nullable=True)
    proof_url: Mapped[str] = mapped_column(String(1024), default="")
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending, approved, rejected
    request_by_role: Mapped[str] = mapped_column(String(30), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
