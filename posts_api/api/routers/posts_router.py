import uuid

from aws_lambda_powertools import Logger
from fastapi import APIRouter, Depends, Request, Response, status

from posts_api.api.decorators import handle_persistence_error
from posts_api.deps import post_repository
from posts_api.exceptions import PostNotFoundException
from posts_api.models.post import Post
from posts_api.repositories.post_repository import PostRepository
from posts_api.schemas.post_schema import CreatePost, UpdatePost

ERROR_POST_NOT_FOUND = "Post not found"

logger = Logger(utc=True)
router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK)
@handle_persistence_error("Failed to get posts")
async def get_posts(
    repository: PostRepository = Depends(post_repository),
) -> list[Post]:
    return await repository.get_all_posts()


@router.get("/{post_uuid}", status_code=status.HTTP_200_OK)
@handle_persistence_error("Failed to get post")
async def get_post_by_uuid(
    post_uuid: uuid.UUID, repository: PostRepository = Depends(post_repository)
) -> Post:
    post = await repository.get_post_by_uuid(post_uuid)
    if post is None:
        logger.warning(f"Post not found {post_uuid=}")
        raise PostNotFoundException(ERROR_POST_NOT_FOUND)
    return post


@router.post("", status_code=status.HTTP_201_CREATED)
@handle_persistence_error("Failed to create post")
async def create_post(
    create_model: CreatePost,
    request: Request,
    response: Response,
    repository: PostRepository = Depends(post_repository),
) -> Post:
    post = await repository.create_post(create_model)
    response.headers["Location"] = request.url_for(
        "get_post_by_uuid", post_uuid=str(post.id)
    ).path
    return post


@router.put("/{post_uuid}", status_code=status.HTTP_200_OK)
@handle_persistence_error("Failed to update post")
async def update_post(
    update_model: UpdatePost,
    post_uuid: uuid.UUID,
    repository: PostRepository = Depends(post_repository),
) -> Post:
    post = await repository.update_post(post_uuid, update_model)
    if post is None:
        logger.warning(f"Post not found {post_uuid=}")
        raise PostNotFoundException(ERROR_POST_NOT_FOUND)
    return post


@router.delete("/{post_uuid}", status_code=status.HTTP_204_NO_CONTENT)
@handle_persistence_error("Failed to delete post")
async def delete_post(
    post_uuid: uuid.UUID, repository: PostRepository = Depends(post_repository)
) -> None:
    if not await repository.delete_post(post_uuid):
        logger.warning(f"Post not found {post_uuid=}")
        raise PostNotFoundException(ERROR_POST_NOT_FOUND)
