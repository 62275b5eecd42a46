from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn
import logging
import sys

from eventhub.config import settings
from eventhub.database import engine
from eventhub.exceptions import register_exception_handlers
from eventhub.models import Base
from eventhub.routes import auth_router, events, social_posts, tickets, ticket_locations, uploads

LOG_LEVEL = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)"
stream_handler = logging.StreamHandler(sys.stdout)
stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
logging.basicConfig(level=LOG_LEVEL, handlers=[stream_handler], force=True)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")
    yield
    await engine.dispose()


app = FastAPI(title="EventHub", lifespan=lifespan)
register_exception_handlers(app)

app.include_router(auth_router.router)
app.include_router(events.router)
app.include_router(social_posts.router)
app.include_router(tickets.router)
app.include_router(ticket_locations.router)
app.include_router(uploads.router)


if __name__ == "__main__":
    uvicorn.run("eventhub.main:app", reload=True)
