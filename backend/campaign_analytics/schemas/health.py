from pydantic import BaseModel
from datetime import datetime
from typing import Dict

class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: datetime
    uptime: float

class ServiceInfoResponse(BaseModel):
    message: str
    status: str
    version: str
    endpoints: Dict[str, str]
    timestamp: datetime
