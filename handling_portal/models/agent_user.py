from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from handling_portal.db.session import Base

class AgentUser(Base):
    __tablename__ = "agent_users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # same id as users.id
    email: Mapped[str] = mapped_column(String(320), index=True)
    full_name: Mapped[str] = mapped_column(String(200), default="")
    company_name: Mapped[str] = mapped_column(String(200), default="")
    phone_number: Mapped[str] = mapped_column(String(40), default="")
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending, active, suspended
    ktp_url: Mapped[str] = mapped_column(String(1024), nullable=True)   # identity card scan
    nib_url: Mapped[str] = mapped_column(String(1024), nullable=True)   # business registration
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
