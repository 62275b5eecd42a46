from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Integer columns are signed 64-bit in every supported backend
SQL_INT_MIN = -(2 ** 63)
SQL_INT_MAX = 2 ** 63 - 1


def fits_sql_int(value: int) -> bool:
    return SQL_INT_MIN <= value <= SQL_INT_MAX


def utcnow() -> datetime:
    """Naive UTC timestamp; every DateTime column stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


from eventhub.models.user import User  # noqa: E402,F401
from eventhub.models.event import Event, EventCategory  # noqa: E402,F401
from eventhub.models.social_post import SocialPost  # noqa: E402,F401
from eventhub.models.tickets import Ticket  # noqa: E402,F401
from eventhub.models.ticket_location import TicketLocation  # noqa: E402,F401
