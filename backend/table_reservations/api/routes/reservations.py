"""
Reservations API: list/search, create, read, update and status changes.

Every body is a {"data": {...}} envelope. Bodies are run through the ordered rule pipelines in
services.reservation_rules before anything touches the database; failures come back as 400 {"error": ...}.
"""
import logging
import re
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from table_reservations.core.clock import restaurant_now
from table_reservations.core.constants import MAX_INTEGER
from table_reservations.core.errors import MSG_MALFORMED_BODY, bad_request, not_found
from table_reservations.db.session import get_db
from table_reservations.models.reservation import Reservation
from table_reservations.services.reservation_rules import (
    CREATE_RULES,
    STATUS_RULES,
    UPDATE_RULES,
    RuleContext,
    parse_date,
    run_rules,
)
from table_reservations.services.reservation_service import (
    create_reservation,
    list_reservations,
    read_reservation,
    reservation_to_dict,
    search_reservations,
    update_reservation,
    update_status,
)

router = APIRouter()
logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"[0-9]+")


async def _json_body(request: Request) -> Any:
    if not await request.body():
        return None
    try:
        return await request.json()
    except ValueError:  # json.JSONDecodeError, UnicodeDecodeError
        raise bad_request(MSG_MALFORMED_BODY) from None


def _parse_id(reservation_id: str) -> Optional[int]:
    """ASCII digits that fit the INTEGER primary key, else None."""
    if not _ID_RE.fullmatch(reservation_id):
        return None
    value = int(reservation_id)
    return value if value <= MAX_INTEGER else None


def _reservation_or_404(reservation_id: str, db: Session = Depends(get_db)) -> Reservation:
    rid = _parse_id(reservation_id)
    row = read_reservation(db, rid) if rid is not None else None
    if row is None:
        raise not_found(f"Reservation {reservation_id} does not exist")
    return row


# --- List / search ---


@router.get("/reservations")
def list_or_search(
    db: Session = Depends(get_db),
    date: Optional[str] = Query(None, description="YYYY-MM-DD; active reservations on that day"),
    mobile_number: Optional[str] = Query(None, description="Digits to match anywhere in the mobile number"),
) -> dict[str, Any]:
    """
    mobile_number wins over date: search covers every status, the date listing hides finished and cancelled.
    """
    if mobile_number:
        rows = search_reservations(db, mobile_number)
    else:
        day = None
        if date:
            day = parse_date(date)
            if day is None:
                raise bad_request("date must be a valid date in YYYY-MM-DD format")
        rows = list_reservations(db, day)
    return {"data": [reservation_to_dict(r) for r in rows]}


# --- Create ---


@router.post("/reservations", status_code=201)
async def create(
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(restaurant_now),
) -> JSONResponse:
    body = await _json_body(request)
    run_rules(CREATE_RULES, RuleContext(body=body, now=now))
    row = create_reservation(db, body["data"])
    return JSONResponse(status_code=201, content={"data": reservation_to_dict(row)})


# --- Read ---


@router.get("/reservations/{reservation_id}")
def read(reservation: Reservation = Depends(_reservation_or_404)) -> dict[str, Any]:
    return {"data": reservation_to_dict(reservation)}


# --- Update ---


@router.put("/reservations/{reservation_id}")
async def update(
    request: Request,
    reservation: Reservation = Depends(_reservation_or_404),
    db: Session = Depends(get_db),
    now: datetime = Depends(restaurant_now),
) -> dict[str, Any]:
    """Replace the reservation's details. Finished reservations are frozen."""
    body = await _json_body(request)
    run_rules(UPDATE_RULES, RuleContext(body=body, now=now, reservation=reservation))
    row = update_reservation(db, reservation, body["data"])
    return {"data": reservation_to_dict(row)}


@router.put("/reservations/{reservation_id}/status")
async def change_status(
    request: Request,
    reservation: Reservation = Depends(_reservation_or_404),
    db: Session = Depends(get_db),
    now: datetime = Depends(restaurant_now),
) -> dict[str, Any]:
    """Move the reservation through booked -> seated -> finished, or cancel it."""
    body = await _json_body(request)
    run_rules(STATUS_RULES, RuleContext(body=body, now=now, reservation=reservation))
    row = update_status(db, reservation, body["data"]["status"])
    return {"data": reservation_to_dict(row)}
