from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import List
from .post import Post

class Campaign(BaseModel):
    """One uploaded CSV file's worth of posts. Never modified once stored."""
    id: int
    posts: List[Post]
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
    )

    class Config:
        frozen = True
        populate_by_name = True
