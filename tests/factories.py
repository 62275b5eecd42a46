"""Row factories and token helpers shared by the test modules."""

from datetime import timedelta
from itertools import count

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.auth.security import create_access_token
from eventhub.models import Event, SocialPost, Ticket, TicketLocation, User, utcnow

_order_numbers = count(1)


def auth_headers(user_id: str, **claims) -> dict:
    token = create_access_token({"sub": user_id, **claims})
    return {"Authorization": f"Bearer {token}"}


async def make_user(db: AsyncSession, user_id: str = "user-1", is_admin: bool = False, **fields) -> User:
    user = User(id=user_id, is_admin=is_admin, email=fields.pop("email", f"{user_id}@example.com"), **fields)
    db.add(user)
    await db.commit()
    return user


async def make_event(db: AsyncSession, **fields) -> Event:
    start = fields.pop("start_date", utcnow() + timedelta(days=1))
    values = dict(
        title="Summer Concert",
        description="An evening of live music",
        start_date=start,
        end_date=start + timedelta(hours=3),
        location="Central Park",
        image_url="https://example.com/image.jpg",
        category="music",
        min_price=20.0,
        max_price=60.0,
        tickets_total=100,
        tickets_sold=0,
        ticket_url="https://example.com/tickets",
        featured=False,
    )
    values.update(fields)
    event = Event(**values)
    db.add(event)
    await db.commit()
    return event


async def make_post(db: AsyncSession, user_id: str, content: str = "Great show!", **fields) -> SocialPost:
    post = SocialPost(user_id=user_id, content=content, **fields)
    db.add(post)
    await db.commit()
    return post


async def make_ticket(db: AsyncSession, user_id: str, event_id: int, **fields) -> Ticket:
    values = dict(
        type="General Admission",
        quantity=1,
        order_number=f"ORD-{next(_order_numbers):05d}",
        total_price=25.0,
    )
    values.update(fields)
    ticket = Ticket(user_id=user_id, event_id=event_id, **values)
    db.add(ticket)
    await db.commit()
    return ticket


async def make_location(db: AsyncSession, name: str, address: str = "1 Main St") -> TicketLocation:
    location = TicketLocation(name=name, address=address)
    db.add(location)
    await db.commit()
    return location



def break_commits(monkeypatch) -> None:
    """Make every later ``AsyncSession.commit`` fail as a dropped connection would."""

    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", commit)
