# file: AUZY/core/config.py
import os
from datetime import datetime, timezone

# ==============================
# Firebase
# ==============================
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID", "auzy-43d3e")
FIREBASE_BUCKET = os.getenv("FIREBASE_BUCKET", f"{FIREBASE_PROJECT_ID}.appspot.com")
CREDENTIAL_SOURCE = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

# ==============================
# Media storage
# ==============================
# "firebase" -> Firebase Storage bucket, "s3" -> S3-compatible bucket
MEDIA_BACKEND = os.getenv("MEDIA_BACKEND", "firebase").lower()

S3_BUCKET = os.getenv("S3_BUCKET", "auzy-media")
S3_ENDPOINT = os.getenv("S3_ENDPOINT")  # e.g. https://your-s3-endpoint
S3_ACCESS_KEY = os.getenv("S3_ACCESS_KEY")
S3_SECRET_KEY = os.getenv("S3_SECRET_KEY")
S3_REGION = os.getenv("S3_REGION", "us-east-1")

# Signed URLs are issued with no practical expiry; there is no renewal path.
SIGNED_URL_EXPIRY = datetime(3000, 1, 1, tzinfo=timezone.utc)
# SigV4 presigned URLs cannot outlive 7 days.
S3_MAX_PRESIGN_SECONDS = 7 * 24 * 60 * 60

FEATURED_SUFFIX = "-feat"

# ==============================
# Collections / folders
# ==============================
BUSINESS_COLLECTION = "business"
POST_COLLECTION = "post"
BUSINESS_TAG_COLLECTION = "business-tag"
POST_TAG_COLLECTION = "post-tag"
USER_META_COLLECTION = "user-meta"

BUSINESS_MEDIA_ROOT = "business"
POST_MEDIA_ROOT = "post"

# array_contains_any accepts at most 30 comparison values
MAX_SEARCH_TAGS = 30

# ==============================
# HTTP
# ==============================
API_PREFIX = "/api"
RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", "1000/hour")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ==============================
# Logging
# ==============================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CLOUD_LOGGING = os.getenv("CLOUD_LOGGING", "").lower() in {"1", "true", "yes"}
