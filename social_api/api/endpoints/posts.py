# ============================================================================
# FILE: social_api/api/endpoints/posts.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, Response, status
from typing import Optional
from social_api.api.dependencies import get_app_settings, get_post_service, require_current_user
from social_api.config import Settings
from social_api.core.exceptions import AppError, BadRequestError, InternalError, NotFoundError
from social_api.schemas.post import PageMeta, PostCreate, PostListResponse, PostResponse, PostUpdate
from social_api.schemas.user import CurrentUser
from social_api.services.post_service import (
    POST_NOT_FOUND,
    PostService,
    check_title_length,
    parse_page_params,
    total_pages,
)
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

SERVER_ERROR = "Внутренняя ошибка сервера"


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    posts: PostService = Depends(get_post_service),
    current_user: CurrentUser = Depends(require_current_user)
):
    """
    Create a new post authored by the current user
    Requires authentication
    """
    if not post_data.title or not post_data.content:
        raise BadRequestError("Заголовок и содержимое поста обязательны")
    check_title_length(post_data.title)

    try:
        return posts.create(post_data.title, post_data.content, current_user.id)
    except Exception as e:
        logger.exception(f"Create post error: {e}")
        raise InternalError(SERVER_ERROR)

@router.get("", response_model=PostListResponse)
def list_posts(
    page: Optional[str] = Query(None, description="Page number, starts at 1"),
    limit: Optional[str] = Query(None, description="Posts per page"),
    posts: PostService = Depends(get_post_service),
    settings: Settings = Depends(get_app_settings)
):
    """
    List posts, newest first
    Available to everyone
    """
    page_number, page_size = parse_page_params(
        page, limit, settings.POSTS_DEFAULT_LIMIT, settings.POSTS_MAX_LIMIT
    )
    try:
        items, total = posts.list_page(page_number, page_size)
    except Exception as e:
        logger.exception(f"List posts error: {e}")
        raise InternalError(SERVER_ERROR)

    return PostListResponse(
        data=[PostResponse.model_validate(item) for item in items],
        meta=PageMeta(
            total=total,
            page=page_number,
            limit=page_size,
            total_pages=total_pages(total, page_size),
        ),
    )

@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    posts: PostService = Depends(get_post_service)
):
    """
    Get a single post
    Available to everyone
    """
    try:
        post = posts.find_by_id(post_id)
    except Exception as e:
        logger.exception(f"Get post error: {e}")
        raise InternalError(SERVER_ERROR)

    if not post:
        raise NotFoundError(POST_NOT_FOUND)
    return post

@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    update_data: Optional[PostUpdate] = None,
    posts: PostService = Depends(get_post_service),
    current_user: CurrentUser = Depends(require_current_user)
):
    """
    Update post title/content
    Requires authentication and ownership
    """
    update_data = update_data or PostUpdate()
    try:
        return posts.update(post_id, current_user.id, update_data.title, update_data.content)
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"Update post error: {e}")
        raise InternalError(SERVER_ERROR)

@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    posts: PostService = Depends(get_post_service),
    current_user: CurrentUser = Depends(require_current_user)
):
    """
    Delete a post
    Requires authentication and ownership
    """
    try:
        posts.delete(post_id, current_user.id)
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"Delete post error: {e}")
        raise InternalError(SERVER_ERROR)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
