import uuid
from datetime import UTC, datetime

import asyncpg
from aws_lambda_powertools import Logger

from posts_api.db import translate_errors
from posts_api.models.post import Post
from posts_api.schemas.post_schema import CreatePost, UpdatePost

POST_COLUMNS = "id, title, content, author, published, created_at, updated_at"

CREATE_POSTS_TABLE = """
    CREATE TABLE IF NOT EXISTS posts (
        id UUID PRIMARY KEY,
        title TEXT NOT NULL,
        content TEXT NOT NULL,
        author TEXT NOT NULL,
        published BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TIMESTAMPTZ NOT NULL,
        updated_at TIMESTAMPTZ
    )
"""


class PostRepository:
    """Posts table access over a shared connection pool.

    Absence is reported as ``None`` (or ``False`` for deletes), store
    failures are raised as ``PersistenceError``.
    """

    def __init__(self, pool: asyncpg.Pool):
        self._logger = Logger(utc=True)
        self._pool = pool

    async def bootstrap(self):
        async with translate_errors("create posts table"):
            await self._pool.execute(CREATE_POSTS_TABLE)

    async def get_all_posts(self) -> list[Post]:
        async with translate_errors("get posts"):
            records = await self._pool.fetch(
                f"SELECT {POST_COLUMNS} FROM posts ORDER BY created_at DESC"
            )
        return [Post.model_validate(dict(record)) for record in records]

    async def get_post_by_uuid(self, post_uuid: uuid.UUID) -> Post | None:
        async with translate_errors("get post"):
            record = await self._pool.fetchrow(
                f"SELECT {POST_COLUMNS} FROM posts WHERE id = $1", post_uuid
            )
        return Post.model_validate(dict(record)) if record else None

    async def create_post(self, create_post: CreatePost) -> Post:
        async with translate_errors("create post"):
            record = await self._pool.fetchrow(
                f"""
                INSERT INTO posts (id, title, content, author, published, created_at)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {POST_COLUMNS}
                """,
                uuid.uuid4(),
                create_post.title,
                create_post.content,
                create_post.author,
                create_post.published,
                datetime.now(UTC),
            )
        post = Post.model_validate(dict(record))
        self._logger.info(f"Post successfully created {post.id=}")
        return post

    async def update_post(
        self, post_uuid: uuid.UUID, update_post: UpdatePost
    ) -> Post | None:
        # Omitted fields arrive as NULL and keep the stored value.
        async with translate_errors("update post"):
            record = await self._pool.fetchrow(
                f"""
                UPDATE posts
                SET title = COALESCE($2, title),
                    content = COALESCE($3, content),
                    author = COALESCE($4, author),
                    published = COALESCE($5, published),
                    updated_at = GREATEST($6, created_at)
                WHERE id = $1
                RETURNING {POST_COLUMNS}
                """,
                post_uuid,
                update_post.title,
                update_post.content,
                update_post.author,
                update_post.published,
                datetime.now(UTC),
            )
        if record is None:
            return None
        self._logger.info(f"Post successfully updated {post_uuid=}")
        return Post.model_validate(dict(record))

    async def delete_post(self, post_uuid: uuid.UUID) -> bool:
        async with translate_errors("delete post"):
            deleted_id = await self._pool.fetchval(
                "DELETE FROM posts WHERE id = $1 RETURNING id", post_uuid
            )
        if deleted_id is None:
            return False
        self._logger.info(f"Post successfully deleted {post_uuid=}")
        return True
