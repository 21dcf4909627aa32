# personal_blog/repositories/category_repository.py
import logging
from typing import Optional, List, Dict, Any
from personal_blog.repositories.base import BaseRepository, build_set_clause

logger = logging.getLogger(__name__)

CATEGORY_COLUMNS = "id, name, code, description, icon_name, created_at, updated_at"

UPDATABLE_COLUMNS = ("name", "description", "icon_name")

# Up to {limit} newest posts per category; categories without posts yield one row with NULL post columns.
CATEGORIES_WITH_RECENT_POSTS_QUERY = """
    SELECT c.id AS category_id, c.name AS category_name, c.description AS category_description,
           c.icon_name AS icon_name, p.id AS post_id, p.title AS post_title,
           p.description AS post_description, c.code AS category_code
    FROM categories c
    LEFT JOIN (
        SELECT id, title, description, category_id, created_at,
               ROW_NUMBER() OVER (PARTITION BY category_id ORDER BY created_at DESC, id DESC) AS rn
        FROM posts
    ) p ON p.category_id = c.id AND p.rn <= {limit}
    ORDER BY c.name, c.id, p.created_at DESC, p.id DESC
"""

POSTS_BY_CATEGORY_NAME_QUERY = """
    SELECT p.id AS post_id, p.title AS post_title, p.description AS post_description,
           c.code AS category_code, c.id AS category_id
    FROM posts p
    INNER JOIN categories c ON p.category_id = c.id
    WHERE c.name = {name}
    ORDER BY p.created_at DESC, p.id DESC
"""


class CategoryRepository(BaseRepository[Dict]):
    """Repository for Category entity operations."""

    async def _fetchrow(self, where: str, value: Any) -> Optional[Dict]:
        query = f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE {where} = "
        if self.use_postgres:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(query + "$1 ORDER BY id LIMIT 1", value)
                return dict(row) if row else None
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(query + "? ORDER BY id LIMIT 1", (value,))
                row = await cursor.fetchone()
                return dict(row) if row else None

    async def get_by_id(self, category_id: int) -> Optional[Dict]:
        """Fetch single category by ID."""
        return await self._fetchrow("id", category_id)

    async def get_by_code(self, code: str) -> Optional[Dict]:
        """Fetch single category by its unique code."""
        return await self._fetchrow("code", code)

    async def get_all(self) -> List[Dict]:
        """Fetch all categories in storage order."""
        query = f"SELECT {CATEGORY_COLUMNS} FROM categories ORDER BY id"

        if self.use_postgres:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(query)
                return [dict(row) for row in rows]
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(query)
                rows = await cursor.fetchall()
                return [dict(row) for row in rows]

    async def create(self, data: Dict[str, Any]) -> Dict:
        """Create a new category. ``code`` and ``name`` must already be set."""
        now = self.database.timestamp()
        params = (
            data["name"],
            data["code"],
            data.get("description"),
            data.get("icon_name"),
            now,
            now,
        )

        if self.use_postgres:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    "INSERT INTO categories (name, code, description, icon_name, created_at, updated_at) "
                    f"VALUES ($1, $2, $3, $4, $5, $6) RETURNING {CATEGORY_COLUMNS}",
                    *params
                )
                return dict(row)
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(
                    "INSERT INTO categories (name, code, description, icon_name, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    params
                )
                category_id = cursor.lastrowid
                await conn.commit()
            return await self.get_by_id(category_id)

    async def update(
        self, category_id: int, data: Dict[str, Any]
    ) -> Optional[Dict]:
        """Update the supplied columns of a category and bump updated_at."""
        fields, params = build_set_clause(data, UPDATABLE_COLUMNS, self.use_postgres)
        params.append(self.database.timestamp())
        params.append(category_id)

        if self.use_postgres:
            idx = len(fields) + 1
            fields.append(f"updated_at = ${idx}")
            query = f"UPDATE categories SET {', '.join(fields)} WHERE id = ${idx + 1}"

            async with self.pool.acquire() as conn:
                await conn.execute(query, *params)
        else:
            fields.append("updated_at = ?")
            query = f"UPDATE categories SET {', '.join(fields)} WHERE id = ?"

            async with self.database.sqlite_connection() as conn:
                await conn.execute(query, tuple(params))
                await conn.commit()
        return await self.get_by_id(category_id)

    async def delete_by_code(self, code: str) -> bool:
        """Check for and delete a category by code in one transaction.

        Returns False (and deletes nothing) when no category has the code.
        """
        if self.use_postgres:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    existing = await conn.fetchval(
                        "SELECT id FROM categories WHERE code = $1 FOR UPDATE", code
                    )
                    if existing is None:
                        return False
                    await conn.execute("DELETE FROM categories WHERE code = $1", code)
                    return True
        else:
            async with self.database.sqlite_connection() as conn:
                await conn.execute("BEGIN IMMEDIATE")
                try:
                    cursor = await conn.execute("SELECT id FROM categories WHERE code = ?", (code,))
                    if await cursor.fetchone() is None:
                        await conn.rollback()
                        return False
                    await conn.execute("DELETE FROM categories WHERE code = ?", (code,))
                    await conn.commit()
                    return True
                except Exception as e:
                    logger.error(f"Failed to delete category with code {code}: {e}", exc_info=True)
                    await conn.rollback()
                    raise

    async def fetch_categories_with_recent_posts(self, per_category: int = 3) -> List[Dict]:
        """Flat category/post rows, newest posts first, at most ``per_category`` posts each."""
        if self.use_postgres:
            query = CATEGORIES_WITH_RECENT_POSTS_QUERY.format(limit="$1")
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(query, per_category)
                return [dict(row) for row in rows]
        else:
            query = CATEGORIES_WITH_RECENT_POSTS_QUERY.format(limit="?")
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(query, (per_category,))
                rows = await cursor.fetchall()
                return [dict(row) for row in rows]

    async def fetch_posts_by_category_name(self, name: str) -> List[Dict]:
        """All posts of the categories named ``name``, newest first."""
        if self.use_postgres:
            query = POSTS_BY_CATEGORY_NAME_QUERY.format(name="$1")
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(query, name)
                return [dict(row) for row in rows]
        else:
            query = POSTS_BY_CATEGORY_NAME_QUERY.format(name="?")
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(query, (name,))
                rows = await cursor.fetchall()
                return [dict(row) for row in rows]

    async def count(self) -> int:
        """Get total number of categories."""
        if self.use_postgres:
            async with self.pool.acquire() as conn:
                count = await conn.fetchval("SELECT COUNT(*) FROM categories")
                return count or 0
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM categories")
                row = await cursor.fetchone()
                return row[0] if row else 0
