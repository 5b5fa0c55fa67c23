# file: AUZY/POST/post.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from AUZY.core.config import POST_MEDIA_ROOT
from AUZY.core.entities import EntityService
from AUZY.core.firebase import get_db
from AUZY.core.repository import CollectionRepository, Document, PostRepository
from AUZY.core.security import get_current_user
from AUZY.media.folders import MediaFolderManager, get_folder_manager
from AUZY.search import composer
from AUZY.utils.validation import parse_post_search

logger = logging.getLogger("post.content")
router = APIRouter(tags=["post"])


# ---------------------------
# Content service
# ---------------------------
class ContentService(EntityService):
    def __init__(self, repository: CollectionRepository, folders: MediaFolderManager):
        super().__init__(repository, folders, kind="post", media_root=POST_MEDIA_ROOT)

    async def search_by_tags(self, tags: Optional[str] = None) -> List[Document]:
        """Posts sharing at least one of the comma separated tag ids. No tags -> every post."""
        criteria = parse_post_search(tags)
        # tags only, no name refinement for posts
        results = await composer.search(self.repository, criteria)
        logger.info("Post search tags=%r -> %d hits", tags, len(results))
        return results


def get_content_service() -> ContentService:
    return ContentService(PostRepository(get_db()), get_folder_manager())


def _post_list(documents: List[Document]) -> list:
    return [{"postId": doc_id, "post": data} for doc_id, data in documents]


# ==============================
# POST CRUD
# ==============================
@router.post("/add-new-post")
async def add_new_post(
    post: dict = Body(...),
    service: ContentService = Depends(get_content_service),
):
    return {"postId": await service.create(post)}


@router.put("/update-post/{post_id}")
async def update_post(
    post_id: str,
    post: dict = Body(...),
    service: ContentService = Depends(get_content_service),
):
    await service.update(post_id, post)
    return {"ok": True}


@router.delete("/delete-post-and-files/{post_id}")
async def delete_post_and_files(
    post_id: str,
    service: ContentService = Depends(get_content_service),
):
    result = await service.remove(post_id)
    if not result.ok:
        return JSONResponse(
            status_code=502,
            content={"error": "Post deleted but some files could not be removed.", **result.to_dict()},
        )
    return result.to_dict()


# ==============================
# READS (authenticated)
# ==============================
@router.get("/get-all-posts")
async def get_all_posts(
    current_user: dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service),
):
    return _post_list(await service.list_all())


@router.get("/get-feat-posts")
async def get_feat_posts(
    current_user: dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service),
):
    return _post_list(await service.list_featured())


@router.get("/get-posts-by-tag")
async def get_posts_by_tag(
    tags: Optional[str] = Query(None, description="Comma separated tag ids"),
    current_user: dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service),
):
    return _post_list(await service.search_by_tags(tags))


# ==============================
# FEATURED IMAGE
# ==============================
@router.get("/get-post-feat-image/{post_id}")
async def get_post_feat_image(
    post_id: str,
    service: ContentService = Depends(get_content_service),
):
    return {"fileURL": await service.get_featured_image_url(post_id)}


@router.post("/upload-post-feat-image/{post_id}")
async def upload_post_feat_image(
    post_id: str,
    body: dict = Body(...),
    service: ContentService = Depends(get_content_service),
):
    return {"fileURL": await service.upload_featured_image(post_id, body.get("localFilePath"))}


@router.delete("/delete-post-feat-image/{post_id}")
async def delete_post_feat_image(
    post_id: str,
    service: ContentService = Depends(get_content_service),
):
    deleted = await service.delete_featured_image(post_id)
    return {"ok": True, "deleted": deleted.path}
