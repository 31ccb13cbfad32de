from sqlalchemy import String, Float, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from handling_portal.db.session import Base

class Membership(Base):
    __tablename__ = "memberships"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    discount_percentage: Mapped[float] = mapped_column(Float, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)
