"""
Centralized reservation constants (Encapsulate What Changes).

Change statuses or field lists here instead of scattering literals across rules, services and routes.
Business hours and the closed day are env-driven (see config.Settings).
"""

# Status lifecycle: booked -> seated -> finished; booked/seated -> cancelled
STATUS_BOOKED = "booked"
STATUS_SEATED = "seated"
STATUS_FINISHED = "finished"
STATUS_CANCELLED = "cancelled"
RESERVATION_STATUSES = (STATUS_BOOKED, STATUS_SEATED, STATUS_FINISHED, STATUS_CANCELLED)

# Hidden from the date listing (dashboard view)
INACTIVE_STATUSES = (STATUS_FINISHED, STATUS_CANCELLED)

# Every key a request body may carry under "data"
VALID_PROPERTIES = (
    "reservation_id",
    "first_name",
    "last_name",
    "mobile_number",
    "reservation_date",
    "reservation_time",
    "people",
    "status",
    "created_at",
    "updated_at",
)

# Keys a create/update body must carry (truthy)
REQUIRED_PROPERTIES = (
    "first_name",
    "last_name",
    "mobile_number",
    "reservation_date",
    "reservation_time",
    "people",
)

# Keys a client may write; the rest are server-managed
EDITABLE_PROPERTIES = REQUIRED_PROPERTIES + ("status",)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMATS = ("%H:%M", "%H:%M:%S")

# Column limits (models.reservation); anything larger is a 400, not a driver error
NAME_MAX_LENGTH = 100
MOBILE_NUMBER_MAX_LENGTH = 32
MAX_INTEGER = 2**31 - 1  # PostgreSQL INTEGER
