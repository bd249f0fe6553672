from datetime import datetime

from pydantic import BaseModel, ConfigDict


# Shape only: whether a URL or code is acceptable is decided by validators.py
class LinkCreate(BaseModel):
    target_url: str | None = None
    code: str | None = None

class LinkOut(BaseModel):
    code: str
    target_url: str
    clicks: int
    last_clicked: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class DeletedLinkOut(BaseModel):
    message: str
    link: LinkOut

class ErrorOut(BaseModel):
    error: str
    detail: str
    retryable: bool | None = None

class HealthOut(BaseModel):
    ok: bool
    version: str
    uptime: float
    timestamp: datetime
