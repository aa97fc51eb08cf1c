from fastapi import Request
from typing import List, Optional
from .models.campaign import Campaign

class CampaignStore:
    """Append-only, process-lifetime campaign storage.

    Nothing is persisted; campaigns disappear when the process exits.
    """

    def __init__(self):
        self._campaigns: List[Campaign] = []

    def append(self, campaign: Campaign) -> Campaign:
        self._campaigns.append(campaign)
        return campaign

    def get_by_id(self, campaign_id: int) -> Optional[Campaign]:
        for campaign in self._campaigns:
            if campaign.id == campaign_id:
                return campaign
        return None

    def get_all(self) -> List[Campaign]:
        return list(self._campaigns)

    def count(self) -> int:
        return len(self._campaigns)

    def __len__(self) -> int:
        return self.count()

def get_campaign_store(request: Request) -> CampaignStore:
    """FastAPI dependency returning the store owned by the running app"""
    return request.app.state.campaign_store
