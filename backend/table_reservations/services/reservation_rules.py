"""
Reservation validation rules.

Each rule is a small predicate over a RuleContext that raises ApiError(400, ...) when the request breaks it.
Pipelines are ordered tuples of rules; run_rules stops at the first failure, so the client always sees the
message of the earliest broken rule. Add new rules here instead of scattering checks in routes.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, Optional

from table_reservations.config import settings
from table_reservations.core.constants import (
    DATE_FORMAT,
    MAX_INTEGER,
    MOBILE_NUMBER_MAX_LENGTH,
    NAME_MAX_LENGTH,
    REQUIRED_PROPERTIES,
    RESERVATION_STATUSES,
    STATUS_BOOKED,
    STATUS_FINISHED,
    TIME_FORMATS,
    VALID_PROPERTIES,
)
from table_reservations.core.errors import ApiError, bad_request
from table_reservations.models.reservation import Reservation

logger = logging.getLogger(__name__)

# ASCII digits only, matched with fullmatch (no trailing-newline slack)
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_RE = re.compile(r"[0-9]{2}:[0-9]{2}(:[0-9]{2})?")
_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass
class RuleContext:
    """Everything a rule may look at: the request body, the stored row (updates) and the current local time."""

    body: Any
    now: datetime
    reservation: Optional[Reservation] = None

    @property
    def data(self) -> dict:
        # has_data runs first in every pipeline, so later rules can rely on a dict here
        return self.body.get("data") if isinstance(self.body, dict) else {}


Rule = Callable[[RuleContext], None]


# ---------------------------------------------------------------------------
# Parsing helpers (shared with the service layer)
# ---------------------------------------------------------------------------


def parse_date(value: Any) -> Optional[date]:
    """YYYY-MM-DD -> date, or None when the value is not a real calendar date."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_time(value: Any) -> Optional[time]:
    """HH:MM or HH:MM:SS -> time, or None when the value is not a real clock time."""
    if not isinstance(value, str) or not _TIME_RE.fullmatch(value):
        return None
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    return None


# ---------------------------------------------------------------------------
# Body shape
# ---------------------------------------------------------------------------


def has_data(ctx: RuleContext) -> None:
    if not isinstance(ctx.body, dict) or not isinstance(ctx.body.get("data"), dict):
        raise bad_request("Body must have data property")


def has_only_valid_properties(ctx: RuleContext) -> None:
    invalid = [key for key in ctx.data if key not in VALID_PROPERTIES]
    if invalid:
        raise bad_request(f"Invalid field(s): {', '.join(invalid)}")


def has_properties(*properties: str) -> Rule:
    """Rule factory: every named property must be present and non-empty."""

    def rule(ctx: RuleContext) -> None:
        missing = [p for p in properties if not ctx.data.get(p)]
        if missing:
            raise bad_request(f"Missing required field(s): {', '.join(missing)}")

    rule.__name__ = f"has_properties({', '.join(properties)})"
    return rule


# ---------------------------------------------------------------------------
# Field formats
# ---------------------------------------------------------------------------


def is_text(*properties: str, max_length: int = NAME_MAX_LENGTH) -> Rule:
    """Rule factory: every named property must be a string of at most max_length characters."""

    def rule(ctx: RuleContext) -> None:
        for p in properties:
            value = ctx.data.get(p)
            if not isinstance(value, str):
                raise bad_request(f"{p} must be text")
            if len(value) > max_length:
                raise bad_request(f"{p} must be at most {max_length} characters")

    rule.__name__ = f"is_text({', '.join(properties)})"
    return rule


def is_valid_mobile_number(ctx: RuleContext) -> None:
    mobile_number = ctx.data.get("mobile_number")
    if not isinstance(mobile_number, str) or not _DIGITS_RE.fullmatch(mobile_number):
        raise bad_request("mobile_number must contain only numbers")
    if len(mobile_number) > MOBILE_NUMBER_MAX_LENGTH:
        raise bad_request(f"mobile_number must be at most {MOBILE_NUMBER_MAX_LENGTH} digits")


def is_valid_date(ctx: RuleContext) -> None:
    if parse_date(ctx.data.get("reservation_date")) is None:
        raise bad_request("reservation_date must be a valid date in YYYY-MM-DD format")


def is_valid_time(ctx: RuleContext) -> None:
    if parse_time(ctx.data.get("reservation_time")) is None:
        raise bad_request("reservation_time must be a valid time in HH:MM format")


def people_is_number(ctx: RuleContext) -> None:
    people = ctx.data.get("people")
    # bool is an int subclass; JSON true is not a party size
    if isinstance(people, bool) or not isinstance(people, int):
        raise bad_request("people must be a number")
    if people < 1:
        raise bad_request("people must be at least 1")
    if people > MAX_INTEGER:
        raise bad_request(f"people must be at most {MAX_INTEGER}")


# ---------------------------------------------------------------------------
# Business rules
# ---------------------------------------------------------------------------


def is_not_closed_day(ctx: RuleContext) -> None:
    day = parse_date(ctx.data.get("reservation_date"))
    if day.weekday() == settings.closed_weekday_index:
        raise bad_request(f"The restaurant is closed on {settings.closed_weekday.capitalize()}s")


def is_in_future(ctx: RuleContext) -> None:
    day = parse_date(ctx.data.get("reservation_date"))
    at = parse_time(ctx.data.get("reservation_time"))
    if datetime.combine(day, at) < ctx.now:
        raise bad_request("Reservation must be in the future")


def is_within_business_hours(ctx: RuleContext) -> None:
    at = parse_time(ctx.data.get("reservation_time"))
    if not settings.opening_time <= at <= settings.last_seating_time:
        raise bad_request(
            "Reservation time must be within business hours "
            f"({settings.opening_time:%H:%M} - {settings.last_seating_time:%H:%M})"
        )


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


def has_booked_status(ctx: RuleContext) -> None:
    status = ctx.data.get("status")
    if status and status != STATUS_BOOKED:
        raise bad_request(f"A new reservation cannot have a status of {status}")


def has_valid_status(ctx: RuleContext) -> None:
    status = ctx.data.get("status")
    if status and status not in RESERVATION_STATUSES:
        raise bad_request(
            f"Invalid status: '{status}'. Status must be one of: {', '.join(RESERVATION_STATUSES)}"
        )


def is_not_finished(ctx: RuleContext) -> None:
    if ctx.reservation is not None and ctx.reservation.status == STATUS_FINISHED:
        raise bad_request("A finished reservation cannot be updated.")


# ---------------------------------------------------------------------------
# Pipelines: order matters, first failure wins
# ---------------------------------------------------------------------------

_FIELD_RULES: tuple[Rule, ...] = (
    has_data,
    has_only_valid_properties,
    has_properties(*REQUIRED_PROPERTIES),
    is_text("first_name", "last_name"),
    is_valid_mobile_number,
    is_valid_date,
    is_valid_time,
    people_is_number,
    is_not_closed_day,
    is_in_future,
    is_within_business_hours,
)

CREATE_RULES: tuple[Rule, ...] = _FIELD_RULES + (has_booked_status,)

UPDATE_RULES: tuple[Rule, ...] = _FIELD_RULES + (has_valid_status, is_not_finished)

STATUS_RULES: tuple[Rule, ...] = (
    has_data,
    has_properties("status"),
    has_valid_status,
    is_not_finished,
)


def run_rules(rules: tuple[Rule, ...], ctx: RuleContext) -> None:
    """Run rules in order; the first ApiError propagates to the caller."""
    for rule in rules:
        try:
            rule(ctx)
        except ApiError as e:
            logger.debug("Rule %s rejected request: %s", getattr(rule, "__name__", rule), e.message)
            raise
