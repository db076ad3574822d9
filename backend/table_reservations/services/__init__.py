from table_reservations.services.reservation_service import (
    create_reservation,
    list_reservations,
    read_reservation,
    reservation_to_dict,
    search_reservations,
    update_reservation,
    update_status,
)

__all__ = [
    "create_reservation",
    "list_reservations",
    "read_reservation",
    "reservation_to_dict",
    "search_reservations",
    "update_reservation",
    "update_status",
]
