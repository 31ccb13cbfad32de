from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column
from handling_portal.db.session import Base

class HandlingService(Base):
    __tablename__ = "airport_handling_services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    service_type: Mapped[str] = mapped_column(String(80), index=True)   # Handling Passenger
    category: Mapped[str] = mapped_column(String(80), index=True)       # Agent Group, Personal
    trip_type: Mapped[str] = mapped_column(String(40))                  # arrival, departure, transit, arrival_departure
    sell_price: Mapped[int] = mapped_column(Integer, default=0)
    additional: Mapped[int] = mapped_column(Integer, nullable=True)     # per extra baggage
