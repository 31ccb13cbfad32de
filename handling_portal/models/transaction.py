from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from handling_portal.db.session import Base

class TransactionHistory(Base):
    """Saldo ledger. Column names follow the hosted schema."""
    __tablename__ = "histori_transaksi"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    code_booking: Mapped[str] = mapped_column(String(40), nullable=True)
    nominal: Mapped[int] = mapped_column(Integer)  # negative for debits
    balance_after: Mapped[int] = mapped_column("saldo_akhir", Integer)
    description: Mapped[str] = mapped_column("keterangan", String(255), default="")
    kind: Mapped[str] = mapped_column("jenis_transaksi", String(60), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=True)
    trans_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
