# personal_blog/repositories/post_repository.py
import logging
from typing import Optional, List, Dict, Any
from personal_blog.repositories.base import BaseRepository, build_set_clause

logger = logging.getLogger(__name__)

POST_SELECT = """
    SELECT p.id, p.title, p.description, p.content, p.author, p.created_at, p.updated_at,
           p.category_id, c.code AS category_code, c.name AS category_name
    FROM posts p
    INNER JOIN categories c ON p.category_id = c.id
"""

UPDATABLE_COLUMNS = ("title", "description", "content", "category_id")


class PostRepository(BaseRepository[Dict]):
    """Repository for Post entity operations."""

    async def get_by_id(self, post_id: int) -> Optional[Dict]:
        """Fetch single post by ID with its category code."""
        if self.use_postgres:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(POST_SELECT + " WHERE p.id = $1", post_id)
                return dict(row) if row else None
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(POST_SELECT + " WHERE p.id = ?", (post_id,))
                row = await cursor.fetchone()
                return dict(row) if row else None

    async def get_all(self) -> List[Dict]:
        """Fetch all posts in storage order."""
        query = POST_SELECT + " ORDER BY p.id"

        if self.use_postgres:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(query)
                return [dict(row) for row in rows]
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(query)
                rows = await cursor.fetchall()
                return [dict(row) for row in rows]

    async def get_recent(self, limit: int) -> List[Dict]:
        """Fetch the ``limit`` newest posts. ``limit`` goes to the store unchecked."""
        query = POST_SELECT + " ORDER BY p.created_at DESC, p.id DESC LIMIT "

        if self.use_postgres:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(query + "$1", limit)
                return [dict(row) for row in rows]
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(query + "?", (limit,))
                rows = await cursor.fetchall()
                return [dict(row) for row in rows]

    async def create(self, data: Dict[str, Any]) -> Dict:
        """Create a new post and return it with its category code."""
        now = self.database.timestamp()
        params = (
            data["title"],
            data.get("description"),
            data.get("content"),
            data.get("author"),
            now,
            now,
            data["category_id"],
        )

        if self.use_postgres:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    post_id = await conn.fetchval(
                        "INSERT INTO posts (title, description, content, author, created_at, updated_at, category_id) "
                        "VALUES ($1, $2, $3, $4, $5, $6, $7) RETURNING id",
                        *params
                    )
                    row = await conn.fetchrow(POST_SELECT + " WHERE p.id = $1", post_id)
                    return dict(row)
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute(
                    "INSERT INTO posts (title, description, content, author, created_at, updated_at, category_id) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    params
                )
                post_id = cursor.lastrowid
                await conn.commit()
            return await self.get_by_id(post_id)

    async def update(
        self, post_id: int, data: Dict[str, Any]
    ) -> Optional[Dict]:
        """Overwrite the supplied columns of a post and bump updated_at.

        author and created_at are never touched.
        """
        fields, params = build_set_clause(data, UPDATABLE_COLUMNS, self.use_postgres)
        params.append(self.database.timestamp())
        params.append(post_id)

        if self.use_postgres:
            idx = len(fields) + 1
            fields.append(f"updated_at = ${idx}")
            query = f"UPDATE posts SET {', '.join(fields)} WHERE id = ${idx + 1}"

            async with self.pool.acquire() as conn:
                await conn.execute(query, *params)
        else:
            fields.append("updated_at = ?")
            query = f"UPDATE posts SET {', '.join(fields)} WHERE id = ?"

            async with self.database.sqlite_connection() as conn:
                await conn.execute(query, tuple(params))
                await conn.commit()
        return await self.get_by_id(post_id)

    async def delete(self, post_id: int) -> bool:
        """Delete a post."""
        if self.use_postgres:
            async with self.pool.acquire() as conn:
                result = await conn.execute("DELETE FROM posts WHERE id = $1", post_id)
                return result != "DELETE 0"
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
                await conn.commit()
                return cursor.rowcount > 0

    async def count(self) -> int:
        """Get total number of posts."""
        if self.use_postgres:
            async with self.pool.acquire() as conn:
                count = await conn.fetchval("SELECT COUNT(*) FROM posts")
                return count or 0
        else:
            async with self.database.sqlite_connection() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM posts")
                row = await cursor.fetchone()
                return row[0] if row else 0
