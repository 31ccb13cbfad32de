from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from handling_portal.db.session import Base

class Country(Base):
    __tablename__ = "countries"
    code: Mapped[str] = mapped_column(String(3), primary_key=True)
    name: Mapped[str] = mapped_column(String(120))


class City(Base):
    __tablename__ = "cities"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    country_code: Mapped[str] = mapped_column(String(3), index=True)


class Location(Base):
    __tablename__ = "locations"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    city_id: Mapped[str] = mapped_column(String(36), index=True)
