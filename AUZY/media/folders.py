# file: AUZY/media/folders.py
"""
Per-entity media folders.

Each business or post owns the key prefix `<entityType>/<entityId>/` in the
object store. A file is the entity's featured image when its name, minus the
extension, ends with `-feat` (e.g. `business/<id>/photo-feat.png`). API
consumers locate the featured asset by that convention alone, so the suffix
must sit immediately before the extension.
"""
import asyncio
import logging
import os
import posixpath
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from AUZY.core.config import FEATURED_SUFFIX, SIGNED_URL_EXPIRY
from AUZY.core.errors import NotFoundError, ValidationError
from AUZY.media.storage import MediaRepository, get_media_repository

logger = logging.getLogger("media.folders")


@dataclass(frozen=True)
class MediaFile:
    path: str
    is_featured: bool = False

    @classmethod
    def from_path(cls, path: str, suffix: str = FEATURED_SUFFIX) -> "MediaFile":
        return cls(path=path, is_featured=_stem(path).endswith(suffix))

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def stem(self) -> str:
        return _stem(self.path)


@dataclass
class FolderDeletion:
    folder: str
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def _stem(path: str) -> str:
    return posixpath.splitext(posixpath.basename(path))[0]


def folder_for(entity_type: str, entity_id: str) -> str:
    return f"{entity_type}/{entity_id}/"


def featured_name(local_path: str, suffix: str = FEATURED_SUFFIX) -> str:
    """photo.png -> photo-feat.png"""
    # accept both separators, local paths may come from Windows clients
    filename = local_path.replace("\\", "/").rsplit("/", 1)[-1]
    base, ext = posixpath.splitext(filename)
    return f"{base}{suffix}{ext}"


# ------------------------------
# Signed URLs
# ------------------------------
class SignedURLIssuer:
    """Read-only URLs with no practical expiry (see SIGNED_URL_EXPIRY)."""

    def __init__(self, media: MediaRepository, expires=SIGNED_URL_EXPIRY):
        self.media = media
        self.expires = expires

    async def issue(self, path: str) -> str:
        return await self.media.sign(path, self.expires)


# ------------------------------
# Folder operations
# ------------------------------
class MediaFolderManager:
    def __init__(self, media: MediaRepository, issuer: SignedURLIssuer = None):
        self.media = media
        self.issuer = issuer or SignedURLIssuer(media)

    async def upload(self, folder: str, local_file: str, remote_name: str) -> str:
        if not os.path.isfile(local_file):
            raise ValidationError("The local file could not be read.", localFilePath=local_file)

        key = f"{folder.rstrip('/')}/{remote_name}"
        await self.media.upload(local_file, key)
        return await self.issuer.issue(key)

    async def list_files(self, folder: str, suffix: str = FEATURED_SUFFIX) -> List[MediaFile]:
        return [MediaFile.from_path(key, suffix) for key in await self.media.list(folder)]

    async def find_by_suffix(self, folder: str, suffix: str = FEATURED_SUFFIX) -> MediaFile:
        for media_file in await self.list_files(folder, suffix):
            if media_file.is_featured:
                return media_file
        raise NotFoundError("The requested resources could not be found.", folder=folder, suffix=suffix)

    async def get_url_with_suffix(self, folder: str, suffix: str = FEATURED_SUFFIX) -> str:
        match = await self.find_by_suffix(folder, suffix)
        return await self.issuer.issue(match.path)

    async def delete_with_suffix(self, folder: str, suffix: str = FEATURED_SUFFIX) -> MediaFile:
        match = await self.find_by_suffix(folder, suffix)
        await self.media.delete(match.path)
        return match

    async def delete_all(self, folder: str) -> FolderDeletion:
        """
        Delete every object under `folder` in parallel.
        Best effort: objects that fail to delete are reported, not retried.
        """
        keys = await self.media.list(folder)
        outcome = FolderDeletion(folder=folder)
        if not keys:
            return outcome

        results = await asyncio.gather(*(self.media.delete(k) for k in keys), return_exceptions=True)
        for key, res in zip(keys, results):
            if isinstance(res, BaseException):
                logger.warning("Could not delete %s: %s", key, res)
                outcome.failed.append(key)
            else:
                outcome.deleted.append(key)

        logger.info("Cleared %s: %d deleted, %d failed", folder, len(outcome.deleted), len(outcome.failed))
        return outcome


@lru_cache(maxsize=1)
def get_folder_manager() -> MediaFolderManager:
    return MediaFolderManager(get_media_repository())
