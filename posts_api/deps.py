from fastapi import Request

from posts_api.repositories.post_repository import PostRepository


def post_repository(request: Request) -> PostRepository:
    return PostRepository(request.app.state.pool)
