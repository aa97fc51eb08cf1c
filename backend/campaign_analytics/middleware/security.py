from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        # Only add headers if they don't already exist (to preserve CORS headers)
        for name, value in SECURITY_HEADERS.items():
            if name not in response.headers:
                response.headers[name] = value

        return response
