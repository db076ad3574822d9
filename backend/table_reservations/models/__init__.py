from table_reservations.models.reservation import Reservation

__all__ = ["Reservation"]
