# personal_blog/routes/posts.py
import logging
from typing import List
from fastapi import APIRouter, Depends, Query, Response

from personal_blog.models.schemas import PostIn, PostOut
from personal_blog.routes.deps import get_post_service
from personal_blog.services import PostService
from personal_blog.services.post_service import DEFAULT_RECENT_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=List[PostOut])
async def list_posts(service: PostService = Depends(get_post_service)):
    """모든 게시물 목록을 반환합니다."""
    logger.info("Received request to fetch all posts")
    return await service.list_posts()


@router.get("/recent", response_model=List[PostOut])
async def get_recent_posts(
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=-2**31, le=2**31 - 1),
    service: PostService = Depends(get_post_service),
):
    """최신 게시물을 limit 개수만큼 반환합니다(기본 3개)."""
    logger.info(f"Received request to fetch {limit} most recent posts")
    return await service.get_recent_posts(limit)


@router.get("/{post_id:int}", response_model=PostOut)
async def get_post_by_id(post_id: int, service: PostService = Depends(get_post_service)):
    """ID로 특정 게시물을 찾아 반환합니다."""
    logger.info(f"Received request to fetch post with id: {post_id}")
    return await service.get_by_id(post_id)


@router.post("", response_model=PostOut)
async def save_or_update_post(payload: PostIn, service: PostService = Depends(get_post_service)):
    """id가 없으면 생성, 있으면 제목/설명/카테고리를 수정합니다."""
    logger.info(f"Received request to create or update post: {payload.title!r}")
    return await service.save_or_update(payload)


@router.delete("/{post_id:int}", status_code=204)
async def delete_post(post_id: int, service: PostService = Depends(get_post_service)):
    logger.info(f"Received request to delete post with id: {post_id}")
    await service.delete_post(post_id)
    return Response(status_code=204)
