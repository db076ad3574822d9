"""
FastAPI app entrypoint.

Reservations REST API plus the new-reservation form.
Run: uvicorn table_reservations.main:app --reload --port 5001
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from table_reservations.api.routes import reservations
from table_reservations.config import settings
from table_reservations.core.errors import install_error_handlers

logging.getLogger("table_reservations").setLevel(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Reservations API ready (timezone=%s, hours %s-%s, closed %ss)",
        settings.restaurant_timezone,
        settings.opening_time.strftime("%H:%M"),
        settings.last_seating_time.strftime("%H:%M"),
        settings.closed_weekday,
    )
    yield


app = FastAPI(title="Table Reservations", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the production frontend
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
_cors_origins.extend(settings.extra_cors_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

app.include_router(reservations.router, tags=["reservations"])


_STATIC_DIR = Path(__file__).resolve().parent / "static"


@app.get("/reservations-ui/new", include_in_schema=False)
def new_reservation_form():
    """Form for booking a new reservation (posts to POST /reservations)."""
    return FileResponse(_STATIC_DIR / "new_reservation.html", media_type="text/html")


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs, health and the booking form."""
    return {"message": "Table Reservations API", "docs": "/docs", "health": "/health", "form": "/reservations-ui/new"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
