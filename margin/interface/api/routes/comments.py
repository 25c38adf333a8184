"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status

from margin.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from margin.domain.error import ValidationError

router = APIRouter(prefix="/api", tags=["comments"], route_class=DishkaRoute)


@router.get("/comments", response_model=list[CommentItem])
async def get_comments(
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    page_path: str | None = None,
) -> list[CommentItem]:
    """Get all comments of a page, oldest first.

    Args:
        get_comments_use_case: Get comments use case from DI
        page_path: Page path to list (required)

    Returns:
        Flat comments ordered by created_at ascending

    Raises:
        HTTPException: 400 if page_path is missing
    """
    try:
        result = await get_comments_use_case.execute(
            GetCommentsRequest(page_path=page_path)
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.reason,
        )
    return result.comments


@router.post(
    "/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CreateCommentResponse:
    """Post an anonymous comment or a reply to a top-level comment.

    The body is read by hand so that every rejection, malformed JSON
    included, is a 400 with a readable reason.

    Args:
        request: Incoming request with a JSON object body
        create_comment_use_case: Create comment use case from DI

    Returns:
        Created comment with its store-assigned id

    Raises:
        HTTPException: 400 if the body is not a JSON object or is rejected
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON body",
        )

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest.model_validate(body)
        )
    except ValidationError as e:
        logfire.info("Comment rejected", reason=e.reason)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.reason,
        )
