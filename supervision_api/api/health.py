import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from supervision_api.core.throttle import skip_throttle
from supervision_api.db.session import get_db
from supervision_api.schemas.health import HealthOut, ProbeOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"], dependencies=[skip_throttle()])

_STARTED = time.monotonic()


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.get("", response_model=HealthOut)
def health(response: Response, db: Session = Depends(get_db)):
    # Simple DB ping
    try:
        db.execute(text("SELECT 1"))
        database = "up"
    except SQLAlchemyError as e:
        logger.warning("Database ping failed: %s", e)
        database = "down"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthOut(
        status="ok" if database == "up" else "error",
        timestamp=_now(),
        uptime=round(time.monotonic() - _STARTED, 3),
        database=database,
    )


@router.get("/ready", response_model=ProbeOut)
def ready():
    return ProbeOut(status="ready", timestamp=_now())


@router.get("/live", response_model=ProbeOut)
def live():
    return ProbeOut(status="alive", timestamp=_now())
