# file: AUZY/core/firebase.py

import os
import json
import logging
import firebase_admin
from firebase_admin import credentials, firestore, storage

import boto3
from botocore.client import Config

from AUZY.core.config import (
    CREDENTIAL_SOURCE,
    FIREBASE_BUCKET,
    FIREBASE_PROJECT_ID,
    S3_ACCESS_KEY,
    S3_BUCKET,
    S3_ENDPOINT,
    S3_REGION,
    S3_SECRET_KEY,
)

logger = logging.getLogger("core.firebase")

_db = None
_bucket = None
_s3_client = None


# ------------------------------
# Firebase app
# ------------------------------
def _load_credentials():
    if not CREDENTIAL_SOURCE:
        raise ValueError("GOOGLE_APPLICATION_CREDENTIALS env var is not set")

    # Case 1: it's a file path
    if os.path.exists(CREDENTIAL_SOURCE):
        logger.info("Loading Firebase credentials from file: %s", CREDENTIAL_SOURCE)
        return credentials.Certificate(CREDENTIAL_SOURCE)

    # Case 2: it's a raw JSON string
    logger.info("Loading Firebase credentials from raw JSON string")
    return credentials.Certificate(json.loads(CREDENTIAL_SOURCE))


def get_app():
    if not firebase_admin._apps:
        try:
            app = firebase_admin.initialize_app(_load_credentials(), {
                "projectId": FIREBASE_PROJECT_ID,
                "storageBucket": FIREBASE_BUCKET,
            })
        except Exception as e:
            logger.exception("Failed to initialize Firebase: %s", e)
            raise
        logger.info("🔥 Firebase initialized with project: %s", app.project_id)
    return firebase_admin.get_app()


# ------------------------------
# Firestore (documents)
# ------------------------------
def get_db():
    """Shared Firestore client, created on first use."""
    global _db
    if _db is None:
        _db = firestore.client(get_app())
        logger.info("🔥 Firestore client project: %s", _db.project)
    return _db


# ------------------------------
# Firebase Storage (media)
# ------------------------------
def get_bucket():
    global _bucket
    if _bucket is None:
        _bucket = storage.bucket(app=get_app())
        logger.info("🔥 Firebase Storage bucket: %s", _bucket.name)
    return _bucket


# ------------------------------
# S3-compatible storage (media, alternative backend)
# ------------------------------
def get_s3_client():
    global _s3_client
    if _s3_client is None:
        try:
            _s3_client = boto3.client(
                "s3",
                endpoint_url=S3_ENDPOINT,
                aws_access_key_id=S3_ACCESS_KEY,
                aws_secret_access_key=S3_SECRET_KEY,
                config=Config(signature_version="s3v4"),
                region_name=S3_REGION,
            )
        except Exception as e:
            logger.exception("Failed to initialize S3 client: %s", e)
            raise
        logger.info("🔥 S3 client initialized for bucket: %s", S3_BUCKET)
    return _s3_client


__all__ = ["get_app", "get_db", "get_bucket", "get_s3_client"]
