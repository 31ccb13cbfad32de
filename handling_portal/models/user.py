from sqlalchemy import String, Integer, DateTime, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from handling_portal.db.session import Base

class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # identity backend user id
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    full_name: Mapped[str] = mapped_column(String(200), default="")
    company_name: Mapped[str] = mapped_column(String(200), default="")
    phone_number: Mapped[str] = mapped_column(String(40), default="")
    role: Mapped[str] = mapped_column(String(30), index=True, default="Agent")  # Agent, Admin, Customer
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending, active, inactive, suspended
    saldo: Mapped[int] = mapped_column(Integer, default=0)

    # agent handling discount ("current" snapshot saved by an operator)
    handling_discount_kind: Mapped[str] = mapped_column(String(20), nullable=True)  # AMOUNT
    handling_discount_value: Mapped[int] = mapped_column(Integer, nullable=True)
    handling_discount_cap: Mapped[int] = mapped_column(Integer, nullable=True)
    handling_discount_amount: Mapped[int] = mapped_column(Integer, nullable=True)
    handling_discount_active: Mapped[bool] = mapped_column(Boolean, default=False)
    handling_discount_is_percentage: Mapped[bool] = mapped_column(Boolean, default=False)
    total_after_discount: Mapped[int] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
