from pydantic import BaseModel
from typing import List, Union
from ..models.campaign import Campaign
from ..models.post import Post
from ..services.analytics_service import AnalyticsView

ALL_MEDIA_TYPES = "all"

class CampaignUploadResponse(BaseModel):
    message: str
    campaign: Campaign

class AverageEngagementRateResponse(BaseModel):
    averageEngagementRate: float

class CampaignAnalyticsResponse(BaseModel):
    campaignId: int
    postsCount: int
    totalFollowersGained: int
    overallEngagementRate: str
    top5Engagement: List[Union[int, str]]
    top5Shares: List[Union[int, str]]
    bestMediaType: str
    bestMediaTypeRate: str
    mediaTypes: List[str]

    @classmethod
    def from_view(cls, campaign: Campaign, view: AnalyticsView) -> "CampaignAnalyticsResponse":
        return cls(
            campaignId=campaign.id,
            postsCount=len(campaign.posts),
            totalFollowersGained=view.total_followers_gained,
            overallEngagementRate=view.overall_engagement_rate,
            top5Engagement=view.top5_engagement,
            top5Shares=view.top5_shares,
            bestMediaType=view.best_media_type,
            bestMediaTypeRate=view.best_media_type_rate,
            # "all" is the client's no-filter option
            mediaTypes=[ALL_MEDIA_TYPES, *view.media_types],
        )

class CampaignPostsResponse(BaseModel):
    campaignId: int
    mediaType: str
    count: int
    posts: List[Post]

class ErrorResponse(BaseModel):
    error: str
