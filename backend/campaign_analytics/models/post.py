from pydantic import BaseModel
from typing import Union

# Canonical column names, in the order they are exposed to clients
INTEGER_FIELDS = (
    "likes",
    "comments",
    "shares",
    "saves",
    "reach",
    "impressions",
    "caption_length",
    "hashtags_count",
    "followers_gained",
)
FLOAT_FIELDS = ("engagement_rate",)
STRING_FIELDS = ("upload_date", "media_type", "traffic_source", "content_category")

# Columns a CSV must carry before any row is normalized
REQUIRED_FIELDS = ("engagement_rate", "media_type", "followers_gained", "shares", "saves")

class Post(BaseModel):
    """One CSV row of post performance data with typed fields.

    ``id`` is the CSV ``post_id`` when the file supplies one, otherwise the
    1-based row position. It is unique only within its campaign.
    """
    id: Union[int, str]
    post_id: Union[int, str]
    upload_date: str = ""
    media_type: str = ""
    likes: int = 0
    comments: int = 0
    shares: int = 0
    saves: int = 0
    reach: int = 0
    impressions: int = 0
    caption_length: int = 0
    hashtags_count: int = 0
    followers_gained: int = 0
    traffic_source: str = ""
    engagement_rate: float = 0.0
    content_category: str = ""

    class Config:
        frozen = True
