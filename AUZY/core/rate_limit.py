from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from AUZY.core.config import RATE_LIMIT_DEFAULT

# ✅ Create a limiter instance
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RATE_LIMIT_DEFAULT],
    headers_enabled=True,
)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    response = JSONResponse(
        status_code=429,
        content={
            "error": "Too many requests. Please slow down.",
            "limit": str(exc.detail),
        },
    )
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)
