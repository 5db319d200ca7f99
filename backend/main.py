"""VC Connect submissions FastAPI application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api import deletion, files, review, submissions
from api.errors import register_error_handlers
from config import settings
from models import Database

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

BANNER = "VC Connect Backend is running..."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to the database and create tables before serving requests."""
    database = Database(settings.database_url, echo=settings.db_echo)
    logger.info("Creating database tables...")
    await database.create_tables()
    app.state.database = database
    logger.info("Database ready.")
    try:
        yield
    finally:
        await database.dispose()
        logger.info("Database connection closed.")


app = FastAPI(title="VC Connect API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(submissions.router)
app.include_router(files.router)
app.include_router(review.router)
app.include_router(deletion.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return BANNER


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
