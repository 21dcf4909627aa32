# personal_blog/routes/categories.py
import logging
from typing import List
from fastapi import APIRouter, Depends, Response

from personal_blog.models.schemas import CategoryIn, CategoryOut, CategoryPostView
from personal_blog.routes.deps import get_category_service
from personal_blog.services import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryOut])
async def list_categories(service: CategoryService = Depends(get_category_service)):
    """모든 카테고리 목록을 반환합니다."""
    logger.info("Received request to list all categories")
    return await service.list_categories()


@router.get("/with-posts", response_model=List[CategoryPostView])
async def list_categories_with_posts(service: CategoryService = Depends(get_category_service)):
    """카테고리별 최신 게시물(최대 3개)을 함께 반환합니다."""
    logger.info("Received request to list categories with recent posts")
    return await service.list_categories_with_recent_posts()


@router.get("/by-name/{name}", response_model=CategoryPostView)
async def get_posts_by_category_name(name: str, service: CategoryService = Depends(get_category_service)):
    """카테고리 이름으로 해당 카테고리의 전체 게시물을 반환합니다."""
    logger.info(f"Received request to fetch posts of category: {name}")
    return await service.get_posts_by_category_name(name)


@router.get("/{code}", response_model=CategoryOut)
async def get_category_by_code(code: str, service: CategoryService = Depends(get_category_service)):
    logger.info(f"Received request to fetch category by code: {code}")
    return await service.get_by_code(code)


@router.post("", response_model=CategoryOut, status_code=201)
async def save_or_update_category(payload: CategoryIn, service: CategoryService = Depends(get_category_service)):
    """코드가 없거나 존재하지 않으면 생성, 존재하면 수정합니다."""
    logger.info(f"Received request to save category: {payload.name!r}")
    return await service.save_or_update(payload)


@router.delete("/{code}")
async def delete_category(code: str, service: CategoryService = Depends(get_category_service)):
    logger.info(f"Received request to delete category with code: {code}")
    await service.delete_by_code(code)
    return Response(status_code=200)
