"""
PostService 단위 테스트

테스트 대상:
- PostService.save_or_update(): 생성(기본 작성자) / 수정(작성자, 생성일 유지)
- 카테고리 코드 검증, 존재하지 않는 게시물 처리
- PostService.get_recent_posts(): 최신순 limit
"""
import pytest

from personal_blog.database import BlogDatabase
from personal_blog.exceptions import EntityNotFoundError, InvalidArgumentError
from personal_blog.models.schemas import CategoryIn, PostIn
from personal_blog.repositories import CategoryRepository, PostRepository
from personal_blog.services import CategoryService, PostService


async def build_services(blog_config):
    db = BlogDatabase(blog_config.database)
    await db.initialize()
    category_repository = CategoryRepository(db)
    post_service = PostService(
        PostRepository(db), category_repository, default_author=blog_config.blog.default_post_author
    )
    return CategoryService(category_repository), post_service


class TestPostServiceCreate:
    """게시물 생성 테스트"""

    @pytest.mark.asyncio
    async def test_create_assigns_default_author(self, blog_config):
        categories, posts = await build_services(blog_config)
        tech = await categories.save_or_update(CategoryIn(name='Tech'))

        post = await posts.save_or_update(PostIn(title='Hello', description='First', category_code=tech.code))

        assert post.id > 0
        assert post.author == 'Test Author'
        assert post.category_code == tech.code
        assert post.created_at is not None

    @pytest.mark.asyncio
    async def test_unknown_category_is_rejected_without_write(self, blog_config):
        _, posts = await build_services(blog_config)

        with pytest.raises(InvalidArgumentError):
            await posts.save_or_update(PostIn(title='Hello', category_code='missing'))
        with pytest.raises(InvalidArgumentError):
            await posts.save_or_update(PostIn(title='Hello'))

        assert await posts.repository.count() == 0

    @pytest.mark.asyncio
    async def test_blank_title_is_rejected(self, blog_config):
        categories, posts = await build_services(blog_config)
        tech = await categories.save_or_update(CategoryIn(name='Tech'))

        with pytest.raises(InvalidArgumentError):
            await posts.save_or_update(PostIn(title='  ', category_code=tech.code))

        assert await posts.repository.count() == 0


class TestPostServiceUpdate:
    """게시물 수정 테스트"""

    @pytest.mark.asyncio
    async def test_update_keeps_author_and_created_at(self, blog_config):
        categories, posts = await build_services(blog_config)
        tech = await categories.save_or_update(CategoryIn(name='Tech'))
        life = await categories.save_or_update(CategoryIn(name='Life'))
        original = await posts.save_or_update(PostIn(title='Hello', description='First', category_code=tech.code))

        updated = await posts.save_or_update(
            PostIn(id=original.id, title='Hello again', description='Second', category_code=life.code)
        )

        assert updated.id == original.id
        assert updated.title == 'Hello again'
        assert updated.description == 'Second'
        assert updated.category_code == life.code
        assert updated.author == original.author
        assert updated.created_at == original.created_at
        assert updated.updated_at >= original.updated_at
        assert await posts.repository.count() == 1

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_not_found(self, blog_config):
        categories, posts = await build_services(blog_config)
        tech = await categories.save_or_update(CategoryIn(name='Tech'))

        with pytest.raises(EntityNotFoundError):
            await posts.save_or_update(PostIn(id=999, title='Ghost', category_code=tech.code))

    @pytest.mark.asyncio
    async def test_update_with_unknown_category_writes_nothing(self, blog_config):
        categories, posts = await build_services(blog_config)
        tech = await categories.save_or_update(CategoryIn(name='Tech'))
        original = await posts.save_or_update(PostIn(title='Hello', category_code=tech.code))

        with pytest.raises(InvalidArgumentError):
            await posts.save_or_update(PostIn(id=original.id, title='Changed', category_code='missing'))

        assert (await posts.get_by_id(original.id)).title == 'Hello'


class TestPostServiceLookup:
    """게시물 조회/삭제 테스트"""

    @pytest.mark.asyncio
    async def test_get_missing_is_not_found(self, blog_config):
        _, posts = await build_services(blog_config)

        with pytest.raises(EntityNotFoundError):
            await posts.get_by_id(12345)

    @pytest.mark.asyncio
    async def test_list_posts_in_storage_order(self, blog_config, sample_posts):
        categories, posts = await build_services(blog_config)
        tech = await categories.save_or_update(CategoryIn(name='Tech'))
        for data in sample_posts:
            await posts.save_or_update(PostIn(category_code=tech.code, **data))

        listed = await posts.list_posts()

        assert [p.title for p in listed] == ['Post 1', 'Post 2', 'Post 3']

    @pytest.mark.asyncio
    async def test_delete(self, blog_config):
        categories, posts = await build_services(blog_config)
        tech = await categories.save_or_update(CategoryIn(name='Tech'))
        post = await posts.save_or_update(PostIn(title='Hello', category_code=tech.code))

        await posts.delete_post(post.id)

        with pytest.raises(EntityNotFoundError):
            await posts.get_by_id(post.id)
        with pytest.raises(EntityNotFoundError):
            await posts.delete_post(post.id)


class TestRecentPosts:
    """PostService.get_recent_posts() 테스트"""

    @pytest.mark.asyncio
    async def test_recent_posts_limits(self, blog_config, sample_posts):
        categories, posts = await build_services(blog_config)
        tech = await categories.save_or_update(CategoryIn(name='Tech'))
        created = []
        for data in sample_posts:
            created.append(await posts.save_or_update(PostIn(category_code=tech.code, **data)))
        newest_first = [p.id for p in reversed(created)]

        assert await posts.get_recent_posts(0) == []
        assert [p.id for p in await posts.get_recent_posts(1)] == newest_first[:1]
        assert [p.id for p in await posts.get_recent_posts()] == newest_first
        assert [p.id for p in await posts.get_recent_posts(10)] == newest_first

    @pytest.mark.asyncio
    async def test_recent_posts_empty_store(self, blog_config):
        _, posts = await build_services(blog_config)

        assert await posts.get_recent_posts() == []
