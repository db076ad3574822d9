"""Reservation: a table booked for a party on a date and time.

status lifecycle: booked -> seated -> finished, or booked/seated -> cancelled.
finished is terminal.
"""
from sqlalchemy import Column, Date, DateTime, Integer, String, Time
from sqlalchemy.sql import func

from table_reservations.db.base import Base


class Reservation(Base):
    __tablename__ = "reservations"

    reservation_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    mobile_number = Column(String(32), nullable=False, index=True)  # digits only
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(Time, nullable=False)
    people = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, default="booked", server_default="booked")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
