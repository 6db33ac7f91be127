# ============================================================================
# FILE: social_api/schemas/post.py
# ============================================================================
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime

class PostCreate(BaseModel):
    """Schema for creating a post"""
    title: Optional[str] = None
    content: Optional[str] = None

class PostUpdate(BaseModel):
    """Schema for updating a post; empty values mean "leave unchanged" """
    title: Optional[str] = None
    content: Optional[str] = None

class PostResponse(BaseModel):
    """Schema for post response"""
    id: str
    title: str
    content: str
    author_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class PostListResponse(BaseModel):
    """Paginated list of posts, newest first"""
    data: List[PostResponse]
    meta: PageMeta
