from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.models import fits_sql_int
from eventhub.models.ticket_location import TicketLocation
from eventhub.schemas.ticket_location import TicketLocationCreateSchema


async def get_ticket_locations(db: AsyncSession) -> List[TicketLocation]:
    result = await db.execute(select(TicketLocation).order_by(TicketLocation.name, TicketLocation.id))
    return result.scalars().all()


async def create_ticket_location(db: AsyncSession, location_in: TicketLocationCreateSchema) -> TicketLocation:
    db_location = TicketLocation(name=location_in.name, address=location_in.address)
    db.add(db_location)
    await db.commit()
    await db.refresh(db_location)
    return db_location


async def delete_ticket_location(db: AsyncSession, location_id: int) -> bool:
    if not fits_sql_int(location_id):
        return False
    db_location = await db.get(TicketLocation, location_id)
    if db_location is None:
        return False
    await db.delete(db_location)
    await db.commit()
    return True
