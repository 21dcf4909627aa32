"""
저장소 계층 단위 테스트

테스트 대상:
- schema_statements(): SQLAlchemy 메타데이터로부터 DDL 생성
- BlogDatabase.initialize(): SQLite 스키마 생성, 외래 키 적용
- CategoryRepository / PostRepository 쿼리
"""
import sqlite3
import pytest
from sqlalchemy.dialects import postgresql, sqlite

from personal_blog.database import BlogDatabase, schema_statements
from personal_blog.repositories import CategoryRepository, PostRepository


async def build_repositories(blog_config):
    db = BlogDatabase(blog_config.database)
    await db.initialize()
    return db, CategoryRepository(db), PostRepository(db)


class TestSchemaStatements:
    """schema_statements() 테스트"""

    def test_all_tables_created_idempotently(self):
        statements = schema_statements(sqlite.dialect())
        tables = [s for s in statements if 'CREATE TABLE' in s]

        assert len(tables) == 4
        assert all('IF NOT EXISTS' in s for s in statements)
        # categories must precede the tables referencing it
        assert 'categories' in tables[0]

    def test_postgres_dialect(self):
        ddl = '\n'.join(schema_statements(postgresql.dialect()))

        assert 'SERIAL' in ddl
        assert 'TIMESTAMP WITH TIME ZONE' in ddl
        assert 'UNIQUE (code)' in ddl


class TestBlogDatabase:
    """BlogDatabase 초기화 테스트"""

    @pytest.mark.asyncio
    async def test_initialize_creates_tables(self, blog_config, temp_db_path):
        db = BlogDatabase(blog_config.database)
        await db.initialize()
        await db.initialize()

        with sqlite3.connect(temp_db_path) as conn:
            names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}

        assert {'categories', 'posts', 'post_metadata', 'recent_posts'} <= names

    @pytest.mark.asyncio
    async def test_timestamp_is_iso_string_for_sqlite(self, blog_config):
        db = BlogDatabase(blog_config.database)

        value = db.timestamp()

        assert isinstance(value, str)
        assert value.endswith('+00:00')


class TestCategoryRepository:
    """CategoryRepository 테스트"""

    @pytest.mark.asyncio
    async def test_create_and_lookup(self, blog_config):
        _, categories, _ = await build_repositories(blog_config)

        created = await categories.create({'name': 'Tech', 'code': 'abc', 'icon_name': 'laptop'})

        assert created['id'] > 0
        assert (await categories.get_by_code('abc'))['name'] == 'Tech'
        assert await categories.get_by_code('nope') is None

    @pytest.mark.asyncio
    async def test_duplicate_code_rejected(self, blog_config):
        _, categories, _ = await build_repositories(blog_config)
        await categories.create({'name': 'Tech', 'code': 'abc'})

        with pytest.raises(sqlite3.IntegrityError):
            await categories.create({'name': 'Other', 'code': 'abc'})

    @pytest.mark.asyncio
    async def test_update_explicit_none_clears_column(self, blog_config):
        _, categories, _ = await build_repositories(blog_config)
        created = await categories.create({'name': 'Tech', 'code': 'abc', 'description': 'text'})

        updated = await categories.update(created['id'], {'description': None})

        assert updated['description'] is None
        assert updated['name'] == 'Tech'

    @pytest.mark.asyncio
    async def test_delete_by_code(self, blog_config):
        _, categories, _ = await build_repositories(blog_config)
        await categories.create({'name': 'Tech', 'code': 'abc'})

        assert await categories.delete_by_code('missing') is False
        assert await categories.count() == 1
        assert await categories.delete_by_code('abc') is True
        assert await categories.count() == 0

    @pytest.mark.asyncio
    async def test_delete_category_with_posts_violates_foreign_key(self, blog_config):
        _, categories, posts = await build_repositories(blog_config)
        tech = await categories.create({'name': 'Tech', 'code': 'abc'})
        await posts.create({'title': 'Hello', 'category_id': tech['id']})

        with pytest.raises(sqlite3.IntegrityError):
            await categories.delete_by_code('abc')

        assert await categories.count() == 1

    @pytest.mark.asyncio
    async def test_recent_posts_rows_include_empty_categories(self, blog_config):
        _, categories, posts = await build_repositories(blog_config)
        tech = await categories.create({'name': 'Tech', 'code': 'abc'})
        await categories.create({'name': 'Art', 'code': 'def'})
        for i in range(4):
            await posts.create({'title': f'Post {i}', 'category_id': tech['id']})

        rows = await categories.fetch_categories_with_recent_posts(2)

        assert [r['category_name'] for r in rows] == ['Art', 'Tech', 'Tech']
        assert rows[0]['post_id'] is None
        assert [r['post_title'] for r in rows[1:]] == ['Post 3', 'Post 2']

    @pytest.mark.asyncio
    async def test_posts_by_category_name_carry_owning_category(self, blog_config):
        _, categories, posts = await build_repositories(blog_config)
        first = await categories.create({'name': 'Tech', 'code': 'abc'})
        second = await categories.create({'name': 'Tech', 'code': 'def'})
        await posts.create({'title': 'Old', 'category_id': first['id']})
        await posts.create({'title': 'New', 'category_id': second['id']})

        rows = await categories.fetch_posts_by_category_name('Tech')

        assert [(r['post_title'], r['category_id']) for r in rows] == [('New', second['id']), ('Old', first['id'])]


class TestPostRepository:
    """PostRepository 테스트"""

    @pytest.mark.asyncio
    async def test_post_requires_existing_category(self, blog_config):
        _, _, posts = await build_repositories(blog_config)

        with pytest.raises(sqlite3.IntegrityError):
            await posts.create({'title': 'Orphan', 'category_id': 42})

    @pytest.mark.asyncio
    async def test_create_returns_category_code(self, blog_config):
        _, categories, posts = await build_repositories(blog_config)
        tech = await categories.create({'name': 'Tech', 'code': 'abc'})

        created = await posts.create({'title': 'Hello', 'content': 'Body', 'author': 'me', 'category_id': tech['id']})

        assert created['category_code'] == 'abc'
        assert created['content'] == 'Body'
        assert created['author'] == 'me'

    @pytest.mark.asyncio
    async def test_update_does_not_touch_author(self, blog_config):
        _, categories, posts = await build_repositories(blog_config)
        tech = await categories.create({'name': 'Tech', 'code': 'abc'})
        created = await posts.create({'title': 'Hello', 'author': 'me', 'category_id': tech['id']})

        updated = await posts.update(created['id'], {'title': 'Changed', 'author': 'someone else'})

        assert updated['title'] == 'Changed'
        assert updated['author'] == 'me'
        assert updated['created_at'] == created['created_at']

    @pytest.mark.asyncio
    async def test_negative_limit_passes_through(self, blog_config):
        _, categories, posts = await build_repositories(blog_config)
        tech = await categories.create({'name': 'Tech', 'code': 'abc'})
        for i in range(2):
            await posts.create({'title': f'Post {i}', 'category_id': tech['id']})

        # SQLite treats a negative LIMIT as "no limit"
        assert len(await posts.get_recent(-1)) == 2


def test_categories_are_only_deleted_by_code():
    from personal_blog.repositories.base import BaseRepository

    assert 'delete' not in BaseRepository.__abstractmethods__
    assert not hasattr(CategoryRepository, 'delete')
    assert hasattr(PostRepository, 'delete')
