import logging
from datetime import datetime, timezone
from typing import Optional, Sequence
from ..models.campaign import Campaign
from ..models.post import Post
from ..utils.exceptions import EmptyCampaignError

logger = logging.getLogger(__name__)

class CampaignService:
    @staticmethod
    def build_campaign(
        posts: Sequence[Post],
        existing_count: int,
        created_at: Optional[datetime] = None
    ) -> Campaign:
        """Wrap normalized posts in a new Campaign numbered after the existing ones"""
        if not posts:
            raise EmptyCampaignError()

        campaign = Campaign(
            id=existing_count + 1,
            posts=list(posts),
            created_at=created_at or datetime.now(timezone.utc)
        )
        logger.info("[CampaignService] Built campaign %d with %d posts", campaign.id, len(campaign.posts))
        return campaign
