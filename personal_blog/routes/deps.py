# personal_blog/routes/deps.py
from fastapi import Request

from personal_blog.services import CategoryService, PostService


def get_category_service(request: Request) -> CategoryService:
    return request.app.state.category_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service
