from datetime import datetime
from typing import Literal

from pydantic import BaseModel

Presence = Literal["present", "missing"]


class EnvironmentPresence(BaseModel):
    r2_endpoint: Presence
    aws_access_key_id: Presence
    aws_secret_access_key: Presence
    r2_bucket: Presence
    r2_public_url: Presence


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    message: str = "R2 uploader is running"
    timestamp: datetime
    environment: EnvironmentPresence
