import logging
import re
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from typing import List, Optional
from ..config import settings
from ..models.campaign import Campaign
from ..schemas.campaign import (
    ALL_MEDIA_TYPES,
    AverageEngagementRateResponse,
    CampaignAnalyticsResponse,
    CampaignPostsResponse,
    CampaignUploadResponse,
    ErrorResponse,
)
from ..services.analytics_service import average_engagement_rate, compute_analytics, filter_posts_by_media_type
from ..services.campaign_service import CampaignService
from ..services.data_service import DataService
from ..services.upload_service import UploadService
from ..store import CampaignStore, get_campaign_store
from ..utils.exceptions import EmptyCampaignError, InvalidFileTypeError, MissingFieldsError, UploadError

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}

# Leading optional sign and digits; "12abc" is 12, "abc" is no id at all
CAMPAIGN_ID_PATTERN = re.compile(r"\s*([+-]?[0-9]+)")

def parse_campaign_id(raw: str) -> Optional[int]:
    match = CAMPAIGN_ID_PATTERN.match(raw)
    return int(match.group(1)) if match else None

def get_campaign_or_404(campaign_id: str, store: CampaignStore) -> Campaign:
    parsed_id = parse_campaign_id(campaign_id)
    campaign = store.get_by_id(parsed_id) if parsed_id is not None else None
    if campaign is None:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return campaign

@router.post("", include_in_schema=False, response_model=CampaignUploadResponse)
@router.post(
    "/",
    response_model=CampaignUploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def upload_campaign(
    file: Optional[UploadFile] = File(None),
    store: CampaignStore = Depends(get_campaign_store)
):
    """Upload a CSV of post performance data and store it as a new campaign"""
    if file is None or not file.filename:
        logger.error("[Uploads] No file in request")
        raise HTTPException(status_code=400, detail="No file uploaded")

    logger.info(
        "[Uploads] Upload received: name=%s, content_type=%s, size=%s",
        file.filename, file.content_type, getattr(file, 'size', None)
    )

    try:
        if not UploadService.is_csv_upload(file.filename, file.content_type):
            raise InvalidFileTypeError()

        # The temporary file is gone once this block exits, on success or failure
        with UploadService.temporary_upload_path(file.filename) as file_path:
            size = await UploadService.save_upload(file, file_path, settings.max_upload_size_bytes)
            logger.info("[Uploads] Saved %d bytes to %s", size, file_path)
            records = DataService.parse_csv_file(file_path)

        if not records:
            raise EmptyCampaignError()

        check = DataService.validate_columns(records[0].keys())
        if not check.is_valid:
            raise MissingFieldsError(check.missing, check.available)

        posts = DataService.normalize_records(records)
        campaign = CampaignService.build_campaign(posts, store.count())
        store.append(campaign)
    except (UploadError, EmptyCampaignError, MissingFieldsError) as e:
        logger.warning("[Uploads] Rejected %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("[Uploads] Error processing campaign file %s", file.filename)
        raise HTTPException(status_code=500, detail=f"Failed to process campaign file: {str(e)}")
    finally:
        await file.close()

    logger.info("[Uploads] Campaign processed successfully: id=%d, posts=%d", campaign.id, len(campaign.posts))
    return CampaignUploadResponse(message="Campaign uploaded successfully", campaign=campaign)

@router.get("", include_in_schema=False, response_model=List[Campaign])
@router.get("/", response_model=List[Campaign])
def get_campaigns(store: CampaignStore = Depends(get_campaign_store)):
    """All stored campaigns in upload order"""
    return store.get_all()

@router.get("/{campaign_id}", response_model=Campaign, responses=NOT_FOUND)
def get_campaign(campaign_id: str, store: CampaignStore = Depends(get_campaign_store)):
    return get_campaign_or_404(campaign_id, store)

@router.get(
    "/{campaign_id}/average-engagement-rate",
    response_model=AverageEngagementRateResponse,
    responses=NOT_FOUND
)
def get_average_engagement_rate(campaign_id: str, store: CampaignStore = Depends(get_campaign_store)):
    """Mean engagement rate across the campaign's posts, to 4 decimal places"""
    campaign = get_campaign_or_404(campaign_id, store)
    return AverageEngagementRateResponse(
        averageEngagementRate=float(average_engagement_rate(campaign.posts))
    )

@router.get("/{campaign_id}/analytics", response_model=CampaignAnalyticsResponse, responses=NOT_FOUND)
def get_campaign_analytics(campaign_id: str, store: CampaignStore = Depends(get_campaign_store)):
    """
    Summary statistics for the campaign table: follower gain, overall
    engagement rate, top 5 posts by engagement and by shares, and the media
    type with the highest average engagement rate.
    """
    campaign = get_campaign_or_404(campaign_id, store)
    view = compute_analytics(campaign.posts)
    return CampaignAnalyticsResponse.from_view(campaign, view)

@router.get("/{campaign_id}/posts", response_model=CampaignPostsResponse, responses=NOT_FOUND)
def get_campaign_posts(
    campaign_id: str,
    media_type: str = Query(ALL_MEDIA_TYPES, description="Media type to keep, or 'all'"),
    store: CampaignStore = Depends(get_campaign_store)
):
    campaign = get_campaign_or_404(campaign_id, store)
    posts = filter_posts_by_media_type(campaign.posts, media_type)
    return CampaignPostsResponse(
        campaignId=campaign.id,
        mediaType=media_type,
        count=len(posts),
        posts=posts
    )
