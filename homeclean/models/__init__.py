from .entities import (
    BOOKING_STATUSES,
    QUOTE_STATUSES,
    INITIAL_STATUS,
    Booking,
    Quote,
    EmailLogEntry,
    iso_now,
    to_entity,
)
from .repository import (
    BookingRepository,
    QuoteRepository,
    EmailLogRepository,
)
