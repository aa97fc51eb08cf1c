import logging
import time
import traceback
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from .config import settings
from .middleware.request_logging import RequestLoggingMiddleware
from .middleware.security import SecurityHeadersMiddleware
from .routers import campaigns
from .schemas.health import HealthResponse, ServiceInfoResponse
from .store import CampaignStore

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="[%(levelname)s] %(asctime)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Upload social media post CSVs and analyze campaign engagement",
    version=settings.APP_VERSION,
    redirect_slashes=False  # collection routes are registered with and without the trailing slash
)

# Campaigns live only as long as the process
app.state.campaign_store = CampaignStore()
app.state.started_at = time.monotonic()

def cors_headers_for(request: Request) -> dict:
    """CORS headers for responses produced outside CORSMiddleware"""
    origin = request.headers.get("origin")
    if origin and origin in settings.cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Allow-Methods": "*",
            "Access-Control-Allow-Headers": "*",
        }
    return {}

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as {"error": message}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}")
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request: {'; '.join(messages)}"}
    )

# Global exception handler to ensure CORS headers are always included
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Unhandled errors become a 500 with the exception message"""
    error_traceback = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc)

    content = {"error": str(exc)}
    if settings.expose_error_details:
        content["error_type"] = type(exc).__name__
        content["traceback"] = error_traceback

    return JSONResponse(
        status_code=500,
        content=content,
        headers=cors_headers_for(request)
    )

if settings.LOG_REQUESTS:
    app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware (must be added last to ensure CORS headers are not overwritten)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    return HealthResponse(
        status="ok",
        message="Backend server is running",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - request.app.state.started_at, 3)
    )

# Include routers
app.include_router(campaigns.router, prefix="/campaigns", tags=["campaigns"])

@app.get("/", response_model=ServiceInfoResponse)
async def root():
    return ServiceInfoResponse(
        message=settings.APP_NAME,
        status="running",
        version=settings.APP_VERSION,
        endpoints={
            "health": "GET /health",
            "uploadCampaign": "POST /campaigns/",
            "getCampaigns": "GET /campaigns/",
            "getCampaign": "GET /campaigns/{id}",
            "getAverageEngagementRate": "GET /campaigns/{id}/average-engagement-rate",
            "getCampaignAnalytics": "GET /campaigns/{id}/analytics",
            "getCampaignPosts": "GET /campaigns/{id}/posts?media_type=",
        },
        timestamp=datetime.now(timezone.utc)
    )
