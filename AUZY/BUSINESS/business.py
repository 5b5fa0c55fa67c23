# file: AUZY/BUSINESS/business.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from AUZY.core.config import BUSINESS_MEDIA_ROOT
from AUZY.core.entities import EntityService
from AUZY.core.firebase import get_db
from AUZY.core.repository import BusinessRepository, CollectionRepository, Document
from AUZY.core.security import get_current_user
from AUZY.media.folders import MediaFolderManager, get_folder_manager
from AUZY.search import composer
from AUZY.utils.validation import parse_business_search

logger = logging.getLogger("business.directory")
router = APIRouter(tags=["business"])


# ---------------------------
# Directory service
# ---------------------------
class DirectoryService(EntityService):
    def __init__(self, repository: CollectionRepository, folders: MediaFolderManager):
        super().__init__(repository, folders, kind="business", media_root=BUSINESS_MEDIA_ROOT)

    async def search(self, name: Optional[str] = None, city: Optional[str] = None, tags: Optional[str] = None) -> List[Document]:
        """
        name: case-insensitive substring, city: exact (lower-cased),
        tags: comma separated ids, any-match.
        """
        criteria = parse_business_search(name, city, tags)
        results = await composer.search(self.repository, criteria, name_field="name")
        logger.info("Business search name=%r city=%r tags=%r -> %d hits", name, city, tags, len(results))
        return results


def get_directory_service() -> DirectoryService:
    return DirectoryService(BusinessRepository(get_db()), get_folder_manager())


def _business_list(documents: List[Document]) -> list:
    return [{"businessId": doc_id, "business": data} for doc_id, data in documents]


# ==============================
# BUSINESS CRUD
# ==============================
@router.post("/add-new-business")
async def add_new_business(
    business: dict = Body(...),
    service: DirectoryService = Depends(get_directory_service),
):
    business_id = await service.create(business)
    return {"businessId": business_id}


@router.put("/update-business/{business_id}")
async def update_business(
    business_id: str,
    business: dict = Body(...),
    service: DirectoryService = Depends(get_directory_service),
):
    await service.update(business_id, business)
    return {"ok": True}


@router.delete("/delete-business-and-files/{business_id}")
async def delete_business_and_files(
    business_id: str,
    service: DirectoryService = Depends(get_directory_service),
):
    result = await service.remove(business_id)
    if not result.ok:
        return JSONResponse(
            status_code=502,
            content={"error": "Business deleted but some files could not be removed.", **result.to_dict()},
        )
    return result.to_dict()


# ==============================
# READS (authenticated)
# ==============================
@router.get("/get-all-businesses")
async def get_all_businesses(
    current_user: dict = Depends(get_current_user),
    service: DirectoryService = Depends(get_directory_service),
):
    return _business_list(await service.list_all())


@router.get("/get-feat-businesses")
async def get_feat_businesses(
    current_user: dict = Depends(get_current_user),
    service: DirectoryService = Depends(get_directory_service),
):
    return _business_list(await service.list_featured())


@router.get("/get-matching-businesses")
async def get_matching_businesses(
    name: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    tags: Optional[str] = Query(None, description="Comma separated tag ids"),
    current_user: dict = Depends(get_current_user),
    service: DirectoryService = Depends(get_directory_service),
):
    return _business_list(await service.search(name=name, city=city, tags=tags))


# ==============================
# FEATURED IMAGE
# ==============================
@router.get("/get-business-feat-image/{business_id}")
async def get_business_feat_image(
    business_id: str,
    service: DirectoryService = Depends(get_directory_service),
):
    return {"fileURL": await service.get_featured_image_url(business_id)}


@router.post("/upload-business-feat-image/{business_id}")
async def upload_business_feat_image(
    business_id: str,
    body: dict = Body(...),
    service: DirectoryService = Depends(get_directory_service),
):
    return {"fileURL": await service.upload_featured_image(business_id, body.get("localFilePath"))}


@router.delete("/delete-business-feat-image/{business_id}")
async def delete_business_feat_image(
    business_id: str,
    service: DirectoryService = Depends(get_directory_service),
):
    deleted = await service.delete_featured_image(business_id)
    return {"ok": True, "deleted": deleted.path}
