from datetime import datetime

from pydantic import BaseModel


class HealthOut(BaseModel):
    status: str
    timestamp: datetime
    uptime: float  # seconds since process start
    database: str


class ProbeOut(BaseModel):
    status: str
    timestamp: datetime
