from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime
from dotenv import load_dotenv
import logging
import os

# Load .env variables
load_dotenv()

# Configure base logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("unisport")

from unisport.routers import (
    auth,
    bookings,
    courts,
    court_mappings,
    notifications,
    venues,
)
from unisport.database import engine, Base, SessionLocal
from unisport.exceptions import BookingError
from unisport.init_db import create_initial_admin
from unisport.services.email import email_service
import uvicorn


@asynccontextmanager
async def lifespan(app: FastAPI):
    if os.getenv("AUTO_CREATE_TABLES", "false").lower() in {"1", "true", "yes"}:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        create_initial_admin(db)
    finally:
        db.close()

    _configure_email_error_reporting()
    yield


app = FastAPI(
    title="UniSport API",
    description="API for university sports facilities: courts, court mappings and bookings",
    version="1.0.0",
    lifespan=lifespan,
)


def _error_emails_enabled() -> bool:
    return os.getenv("ENABLE_ERROR_EMAILS", "false").lower() in {"1", "true", "yes"}


def _configure_email_error_reporting() -> None:
    if not _error_emails_enabled():
        logger.info(
            "Email error reporting disabled (ENABLE_ERROR_EMAILS not set or false)"
        )
        return

    if not email_service.is_configured():
        logger.warning("Email service not configured: missing SMTP settings")
        return

    logger.info("Email error reporting configured successfully")


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["authentication"])
app.include_router(venues.router, tags=["venues"])
app.include_router(courts.router, prefix="/courts", tags=["courts"])
app.include_router(
    court_mappings.router, prefix="/court-mappings", tags=["court-mappings"]
)
app.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
app.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)


@app.get("/")
def read_root():
    return {"message": "Welcome to UniSport API"}


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    logger.info(
        "Booking request rejected | path=%s | status=%s | detail=%s",
        request.url.path,
        exc.status_code,
        exc.detail,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Global unhandled exception handler -> logs ERROR and sends email
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    client = request.client.host if request.client else "unknown"
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        client,
    )

    if _error_emails_enabled() and email_service.is_configured():
        email_service.send_error_email(
            {
                "path": request.url.path,
                "method": request.method,
                "client": client,
                "exception": exc,
                "timestamp": datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S"),
            }
        )

    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


if __name__ == "__main__":
    uvicorn.run("unisport.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
