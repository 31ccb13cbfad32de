from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from handling_portal.db.session import Base

class PaymentMethod(Base):
    __tablename__ = "payment_methods"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), default="")
    bank_name: Mapped[str] = mapped_column(String(120), default="")
    account_holder: Mapped[str] = mapped_column(String(200), default="")
    account_number: Mapped[str] = mapped_column(String(60), default="")
    type: Mapped[str] = mapped_column(String(20), default="manual")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
