# personal_blog/models/schemas.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON은 camelCase로 주고받고, 입력은 snake_case도 허용"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryIn(CamelModel):
    name: Optional[str] = Field(None, max_length=255)
    code: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    icon_name: Optional[str] = Field(None, max_length=255)


class CategoryOut(CamelModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None
    icon_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PostIn(CamelModel):
    id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    category_code: Optional[str] = None


class PostOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    author: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category_code: str


class PostSummary(CamelModel):
    post_id: int
    post_title: str
    post_description: Optional[str] = None
    category_code: str


class CategoryPostView(CamelModel):
    category_id: int
    category_name: str
    category_description: Optional[str] = None
    icon_name: Optional[str] = None
    posts: List[PostSummary] = Field(default_factory=list)
