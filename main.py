import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db, init_db
from app.core.exceptions import CheckFailed, MalformedTicketId, TicketError, TicketNotFound
from app.routers import events, tickets
from app.schemas.common import ErrorResponse

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.PROJECT_NAME} v{settings.VERSION} started ({settings.ENVIRONMENT})")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next: Callable) -> Response:
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )
    return response


@app.exception_handler(TicketError)
async def ticket_error_handler(request: Request, exc: TicketError) -> JSONResponse:
    if isinstance(exc, MalformedTicketId):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, TicketNotFound):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, CheckFailed):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.error(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.error(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=exc.message, code=exc.code).model_dump(),
    )


app.include_router(tickets.router)
app.include_router(events.router)


@app.get("/api/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db_check = db.execute(text("SELECT 'ok' AS health_check")).scalar()
    except SQLAlchemyError as e:
        logger.error(f"Database connection check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable"
        )

    return {
        "status": "ok",
        "dbCheck": db_check,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
