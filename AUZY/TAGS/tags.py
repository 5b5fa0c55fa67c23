# file: AUZY/TAGS/tags.py
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from AUZY.core.config import BUSINESS_TAG_COLLECTION, POST_TAG_COLLECTION
from AUZY.core.errors import NotFoundError
from AUZY.core.firebase import get_db
from AUZY.core.repository import CollectionRepository, Document, TagRepository
from AUZY.core.security import get_current_admin, get_current_user
from AUZY.utils.validation import require, require_collection_id

logger = logging.getLogger("tags")


class TagService:
    """
    Tags are managed on their own; businesses and posts reference them by id
    and nothing cascades when a tag changes or disappears.
    """

    def __init__(self, repository: CollectionRepository):
        self.repository = repository

    async def create(self, tag: Dict[str, Any]) -> str:
        require("tag", tag)
        tag_id = await self.repository.add(tag)
        logger.info("Created %s %s", self.repository.name, tag_id)
        return tag_id

    async def update(self, tag_id: str, tag: Dict[str, Any]) -> None:
        require_collection_id(tag_id)
        require("tag", tag)
        await self.repository.set(tag_id, tag)

    async def remove(self, tag_id: str) -> None:
        require_collection_id(tag_id)
        await self.repository.delete(tag_id)

    async def get(self, tag_id: str) -> Dict[str, Any]:
        require_collection_id(tag_id)
        tag = await self.repository.get(tag_id)
        if tag is None:
            raise NotFoundError("Tag not found.", tagId=tag_id, collection=self.repository.name)
        return tag

    async def list_all(self) -> List[Document]:
        return await self.repository.list_all()


def get_business_tag_service() -> TagService:
    return TagService(TagRepository(get_db(), BUSINESS_TAG_COLLECTION))


def get_post_tag_service() -> TagService:
    return TagService(TagRepository(get_db(), POST_TAG_COLLECTION))


def _tag_list(documents: List[Document]) -> list:
    return [{"tagId": doc_id, "tag": data} for doc_id, data in documents]


def build_tag_router(entity: str, provider) -> APIRouter:
    """
    Same five routes for business tags and post tags:
    /add-new-{entity}-tag, /update-{entity}-tag/{id}, /delete-{entity}-tag/{id},
    /get-{entity}-tag/{id}, /get-all-{entity}-tags
    """
    router = APIRouter(tags=[f"{entity}-tag"])

    @router.post(f"/add-new-{entity}-tag")
    async def add_new_tag(
        tag: dict = Body(...),
        current_user: dict = Depends(get_current_admin),
        service: TagService = Depends(provider),
    ):
        return {"tagId": await service.create(tag)}

    @router.put(f"/update-{entity}-tag/{{tag_id}}")
    async def update_tag(
        tag_id: str,
        tag: dict = Body(...),
        current_user: dict = Depends(get_current_admin),
        service: TagService = Depends(provider),
    ):
        await service.update(tag_id, tag)
        return {"ok": True}

    @router.delete(f"/delete-{entity}-tag/{{tag_id}}")
    async def delete_tag(
        tag_id: str,
        current_user: dict = Depends(get_current_admin),
        service: TagService = Depends(provider),
    ):
        await service.remove(tag_id)
        return {"ok": True}

    @router.get(f"/get-{entity}-tag/{{tag_id}}")
    async def get_tag(tag_id: str, service: TagService = Depends(provider)):
        return await service.get(tag_id)

    @router.get(f"/get-all-{entity}-tags")
    async def get_all_tags(
        current_user: dict = Depends(get_current_user),
        service: TagService = Depends(provider),
    ):
        return _tag_list(await service.list_all())

    return router


business_tag_router = build_tag_router("business", get_business_tag_service)
post_tag_router = build_tag_router("post", get_post_tag_service)
