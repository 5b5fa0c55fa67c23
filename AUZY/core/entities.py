# file: AUZY/core/entities.py
"""
Orchestration shared by the Business and Post services.

A record lives in two systems with no transactional link: the document in
Firestore and its media folder in the object store. Deleting an entity removes
the document first and then clears the folder on a best-effort basis; whatever
could not be removed is reported back as orphaned.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from AUZY.core.errors import StoreError, ValidationError
from AUZY.core.logger import log_to_cloud
from AUZY.core.repository import CollectionRepository, Document
from AUZY.media.folders import MediaFile, MediaFolderManager, featured_name, folder_for
from AUZY.search import composer
from AUZY.utils.validation import is_file_path, require, require_collection_id

logger = logging.getLogger("core.entities")


@dataclass
class DeletionResult:
    document_deleted: bool
    files_deleted: List[str] = field(default_factory=list)
    orphaned_files: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.document_deleted and not self.orphaned_files

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documentDeleted": self.document_deleted,
            "filesDeleted": self.files_deleted,
            "orphanedFiles": self.orphaned_files,
        }


class EntityService:
    """CRUD, featured listing and featured-image handling for one entity type."""

    def __init__(self, repository: CollectionRepository, folders: MediaFolderManager, kind: str, media_root: str):
        self.repository = repository
        self.folders = folders
        self.kind = kind
        self.media_root = media_root

    def folder(self, entity_id: str) -> str:
        return folder_for(self.media_root, entity_id)

    # ---------------------------
    # Documents
    # ---------------------------
    async def create(self, record: Dict[str, Any]) -> str:
        require(self.kind, record)
        entity_id = await self.repository.add(record)
        logger.info("Created %s %s", self.kind, entity_id)
        return entity_id

    async def update(self, entity_id: str, record: Dict[str, Any]) -> None:
        require_collection_id(entity_id)
        require(self.kind, record)
        await self.repository.set(entity_id, record)
        logger.info("Updated %s %s", self.kind, entity_id)

    async def remove(self, entity_id: str) -> DeletionResult:
        require_collection_id(entity_id)
        await self.repository.delete(entity_id)

        folder = self.folder(entity_id)
        try:
            outcome = await self.folders.delete_all(folder)
        except StoreError as e:
            # listing failed, the whole folder is unaccounted for
            logger.error("Could not clear %s after deleting %s %s: %s", folder, self.kind, entity_id, e)
            result = DeletionResult(document_deleted=True, orphaned_files=[folder])
        else:
            result = DeletionResult(
                document_deleted=True,
                files_deleted=outcome.deleted,
                orphaned_files=outcome.failed,
            )

        if result.orphaned_files:
            log_to_cloud(
                "media", "WARNING",
                f"{self.kind} {entity_id} deleted with orphaned media",
                metadata={"orphaned": result.orphaned_files},
            )
        return result

    async def list_all(self) -> List[Document]:
        return await self.repository.list_all()

    async def list_featured(self) -> List[Document]:
        return await composer.featured(self.repository)

    # ---------------------------
    # Featured image
    # ---------------------------
    async def get_featured_image_url(self, entity_id: str) -> str:
        require_collection_id(entity_id)
        return await self.folders.get_url_with_suffix(self.folder(entity_id))

    async def upload_featured_image(self, entity_id: str, local_file_path: Any) -> str:
        require_collection_id(entity_id)
        if not is_file_path(local_file_path):
            raise ValidationError("The request body provided is not valid or acceptable.", localFilePath=local_file_path)
        return await self.folders.upload(self.folder(entity_id), local_file_path, featured_name(local_file_path))

    async def delete_featured_image(self, entity_id: str) -> MediaFile:
        require_collection_id(entity_id)
        return await self.folders.delete_with_suffix(self.folder(entity_id))
