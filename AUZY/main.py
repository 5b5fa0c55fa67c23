# file: AUZY/main.py

# Standard library
import logging

# FastAPI core + responses
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Rate limiting
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

# ------------------------------
# Routers and shared pieces
# ------------------------------
from AUZY.BUSINESS.business import router as business_router
from AUZY.POST.post import router as post_router
from AUZY.TAGS.tags import business_tag_router, post_tag_router
from AUZY.core.config import API_PREFIX, CORS_ORIGINS
from AUZY.core.errors import AuzyError, auzy_error_handler, unhandled_error_handler
from AUZY.core.firebase import get_db
from AUZY.core.logger import setup_logging
from AUZY.core.rate_limit import limiter, rate_limit_handler

# Logging setup
setup_logging()
logger = logging.getLogger("main")

# App initialization
app = FastAPI(title="Auzy Directory API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiter
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


# ------------------------------
# Error mapping: every failure renders as {"error": <message>}
# ------------------------------
app.add_exception_handler(AuzyError, auzy_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("%s %s -> malformed request: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "The request provided is not valid or acceptable."},
    )


# Routers
app.include_router(business_router, prefix=API_PREFIX)
app.include_router(business_tag_router, prefix=API_PREFIX)
app.include_router(post_router, prefix=API_PREFIX)
app.include_router(post_tag_router, prefix=API_PREFIX)


# Ping endpoint
@app.get("/ping")
@limiter.limit("5/minute")
async def ping(request: Request, response: Response):
    return {"message": "pong"}


# ------------------------------
# Optional: health endpoint for Firebase
# ------------------------------
@app.get("/firebase/health")
async def firebase_health():
    try:
        project = getattr(get_db(), "project", None)
        return {"ok": True, "firestore_project": project}
    except Exception as e:
        logger.exception("Firebase health check failed: %s", e)
        raise HTTPException(status_code=500, detail="Firebase health check failed")
