# ============================================================================
# FILE: social_api/services/post_service.py
# ============================================================================
from datetime import datetime
from typing import List, Optional, Tuple
import re
from sqlalchemy.orm import Session
from social_api.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from social_api.db.models.post import Post
import logging

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

POST_NOT_FOUND = "Пост не найден"
ACCESS_DENIED = "Доступ запрещен"

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
# Largest OFFSET/LIMIT a 64-bit SQL integer can hold
MAX_SQL_INT = 2 ** 63 - 1
MAX_TITLE_LENGTH = 200


def _parse_positive_int(value: Optional[str], default: int) -> int:
    """Leading-integer parse ("3", "3abc" -> 3); anything else or < 1 gives the default"""
    if value is None:
        return default
    match = _INT_PREFIX.match(str(value))
    if not match:
        return default
    number = int(match.group(1))
    if number < 1:
        return default
    return min(number, MAX_SQL_INT)


def parse_page_params(
    page: Optional[str],
    limit: Optional[str],
    default_limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = None,
) -> Tuple[int, int]:
    """Turn raw ?page=&limit= query values into usable numbers"""
    page_number = _parse_positive_int(page, DEFAULT_PAGE)
    page_size = _parse_positive_int(limit, default_limit)
    if max_limit is not None:
        page_size = min(page_size, max_limit)
    return page_number, page_size


def check_title_length(title: Optional[str]) -> None:
    if title and len(title) > MAX_TITLE_LENGTH:
        raise BadRequestError(f"Заголовок не должен превышать {MAX_TITLE_LENGTH} символов")


def total_pages(total: int, limit: int) -> int:
    return -(-total // limit)


class PostService:
    """Persistence of posts; mutations are restricted to the post's author"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, title: str, content: str, author_id: str) -> Post:
        try:
            post = Post(title=title, content=content, author_id=author_id)
            self.db.add(post)
            self.db.commit()
            self.db.refresh(post)
            logger.info(f"Post created: {post.id} by user {author_id}")
            return post
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating post: {e}")
            raise

    def list_page(self, page: int, limit: int) -> Tuple[List[Post], int]:
        """Return one page of posts (newest first) and the total number of posts"""
        skip = (page - 1) * limit
        total = self.db.query(Post).count()
        if skip > MAX_SQL_INT:
            return [], total
        posts = (
            self.db.query(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return posts, total

    def find_by_id(self, post_id: str) -> Optional[Post]:
        return self.db.query(Post).filter(Post.id == post_id).first()

    def _get_owned(self, post_id: str, caller_id: str) -> Post:
        post = self.find_by_id(post_id)
        if not post:
            raise NotFoundError(POST_NOT_FOUND)
        if post.author_id != caller_id:
            logger.warning(f"User {caller_id} tried to modify post {post_id} owned by {post.author_id}")
            raise ForbiddenError(ACCESS_DENIED)
        return post

    def update(
        self,
        post_id: str,
        caller_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Post:
        """Update title/content of an owned post; empty values keep the current field"""
        post = self._get_owned(post_id, caller_id)
        check_title_length(title)

        try:
            if title:
                post.title = title
            if content:
                post.content = content
            post.updated_at = datetime.utcnow()

            self.db.commit()
            self.db.refresh(post)
            logger.info(f"Post updated: {post_id}")
            return post
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating post: {e}")
            raise

    def delete(self, post_id: str, caller_id: str) -> None:
        post = self._get_owned(post_id, caller_id)

        try:
            self.db.delete(post)
            self.db.commit()
            logger.info(f"Post deleted: {post_id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting post: {e}")
            raise
