"""
Reservations: thin data access over the reservations table.

Callers validate bodies with services.reservation_rules first; these functions assume well-formed data.
"""
import logging
import re
from datetime import date
from typing import Any, Optional

from sqlalchemy.orm import Session

from table_reservations.core.constants import INACTIVE_STATUSES, STATUS_BOOKED
from table_reservations.models.reservation import Reservation
from table_reservations.services.reservation_rules import parse_date, parse_time

logger = logging.getLogger(__name__)


def reservation_to_dict(r: Reservation) -> dict[str, Any]:
    return {
        "reservation_id": r.reservation_id,
        "first_name": r.first_name,
        "last_name": r.last_name,
        "mobile_number": r.mobile_number,
        "reservation_date": r.reservation_date.isoformat() if r.reservation_date else None,
        "reservation_time": r.reservation_time.isoformat() if r.reservation_time else None,
        "people": r.people,
        "status": r.status,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "updated_at": r.updated_at.isoformat() if r.updated_at else None,
    }


def list_reservations(db: Session, reservation_date: Optional[date] = None) -> list[Reservation]:
    """
    Active reservations (not finished or cancelled).
    With a date: that day's reservations by time. Without: all of them by date, then time.
    """
    q = db.query(Reservation).filter(Reservation.status.not_in(INACTIVE_STATUSES))
    if reservation_date is not None:
        q = q.filter(Reservation.reservation_date == reservation_date)
    return q.order_by(Reservation.reservation_date, Reservation.reservation_time, Reservation.reservation_id).all()


def search_reservations(db: Session, mobile_number: str) -> list[Reservation]:
    """Reservations whose mobile number contains the given digits (partial match, any status)."""
    digits = re.sub(r"[^0-9]", "", mobile_number or "")
    if not digits:
        return []
    return (
        db.query(Reservation)
        .filter(Reservation.mobile_number.contains(digits, autoescape=True))
        .order_by(Reservation.reservation_date, Reservation.reservation_time, Reservation.reservation_id)
        .all()
    )


def read_reservation(db: Session, reservation_id: int) -> Optional[Reservation]:
    return db.query(Reservation).filter(Reservation.reservation_id == reservation_id).first()


def _apply_fields(row: Reservation, data: dict[str, Any]) -> None:
    row.first_name = data["first_name"]
    row.last_name = data["last_name"]
    row.mobile_number = data["mobile_number"]
    row.reservation_date = parse_date(data["reservation_date"])
    row.reservation_time = parse_time(data["reservation_time"])
    row.people = data["people"]


def create_reservation(db: Session, data: dict[str, Any]) -> Reservation:
    """Insert a new reservation. Status is always booked on creation."""
    row = Reservation(status=STATUS_BOOKED)
    _apply_fields(row, data)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(
        "Created reservation %s for %s on %s %s (party of %s)",
        row.reservation_id,
        row.last_name,
        row.reservation_date,
        row.reservation_time,
        row.people,
    )
    return row


def update_reservation(db: Session, row: Reservation, data: dict[str, Any]) -> Reservation:
    """Overwrite the editable fields of an existing reservation; status only when given."""
    _apply_fields(row, data)
    if data.get("status"):
        row.status = data["status"]
    db.commit()
    db.refresh(row)
    logger.info("Updated reservation %s", row.reservation_id)
    return row


def update_status(db: Session, row: Reservation, status: str) -> Reservation:
    previous = row.status
    row.status = status
    db.commit()
    db.refresh(row)
    logger.info("Reservation %s status %s -> %s", row.reservation_id, previous, status)
    return row
