# personal_blog/services/post_service.py
import logging
from typing import List, NoReturn, Optional

from personal_blog.exceptions import EntityNotFoundError, InvalidArgumentError
from personal_blog.mappers import post_in_to_row, post_row_to_out
from personal_blog.models.schemas import PostIn, PostOut
from personal_blog.repositories import CategoryRepository, PostRepository

DEFAULT_RECENT_LIMIT = 3


class PostService:
    """Post lifecycle. New posts get the configured default author."""

    def __init__(
        self,
        repository: PostRepository,
        category_repository: CategoryRepository,
        default_author: str,
        logger: Optional[logging.Logger] = None,
    ):
        self.repository = repository
        self.category_repository = category_repository
        self.default_author = default_author
        self.logger = logger or logging.getLogger(__name__)

    async def list_posts(self) -> List[PostOut]:
        self.logger.info("Fetching all posts")
        rows = await self.repository.get_all()
        return [post_row_to_out(row) for row in rows]

    async def get_by_id(self, post_id: int) -> PostOut:
        self.logger.info(f"Fetching post by id: {post_id}")
        row = await self.repository.get_by_id(post_id)
        if row is None:
            self._not_found(post_id)
        return post_row_to_out(row)

    async def save_or_update(self, post: PostIn) -> PostOut:
        """Create a post, or update title/description/category of an existing one.

        Nothing is written when the post id is unknown, the title is blank or
        the category code matches no category.
        """
        if post.id is not None and await self.repository.get_by_id(post.id) is None:
            self._not_found(post.id)

        if post.title is None or not post.title.strip():
            raise InvalidArgumentError("Post title is required")

        category = None
        if post.category_code is not None:
            category = await self.category_repository.get_by_code(post.category_code)
        if category is None:
            self.logger.warning(f"Category not found for code: {post.category_code}")
            raise InvalidArgumentError(f"Category not found for code: {post.category_code}")

        if post.id is None:
            self.logger.info(f"Creating post {post.title!r} in category {post.category_code}")
            row = await self.repository.create(
                post_in_to_row(post, category["id"], author=self.default_author)
            )
        else:
            self.logger.info(f"Updating post with id: {post.id}")
            row = await self.repository.update(post.id, post_in_to_row(post, category["id"]))
            if row is None:
                self._not_found(post.id)
        return post_row_to_out(row)

    async def delete_post(self, post_id: int) -> None:
        self.logger.info(f"Deleting post with id: {post_id}")
        if await self.repository.get_by_id(post_id) is None:
            self._not_found(post_id)
        await self.repository.delete(post_id)

    async def get_recent_posts(self, limit: int = DEFAULT_RECENT_LIMIT) -> List[PostOut]:
        self.logger.info(f"Fetching {limit} most recent posts")
        rows = await self.repository.get_recent(limit)
        return [post_row_to_out(row) for row in rows]

    def _not_found(self, post_id: int) -> NoReturn:
        self.logger.warning(f"Post with id {post_id} not found")
        raise EntityNotFoundError(f"Post with id {post_id} not found")
