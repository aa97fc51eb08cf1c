#!/usr/bin/env python3
"""Start the campaign analytics API with uvicorn"""
import os
import uvicorn
from campaign_analytics.config import settings

if __name__ == "__main__":
    # PORT from the environment wins (hosting platforms set it)
    port = int(os.environ.get("PORT", settings.PORT))

    uvicorn.run(
        "campaign_analytics.main:app",
        host=settings.HOST,
        port=port,
        log_level=settings.LOG_LEVEL.lower()
    )
