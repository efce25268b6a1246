"""BackPage (weekly community board) routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from undead.application.usecase.backpage import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    CreateReplyRequest,
    CreateReplyResponse,
    CreateReplyUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    DeleteReplyRequest,
    DeleteReplyResponse,
    DeleteReplyUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    ReportPostRequest,
    ReportPostResponse,
    ReportPostUseCase,
    ReportReplyRequest,
    ReportReplyResponse,
    ReportReplyUseCase,
    VotePostRequest,
    VotePostResponse,
    VotePostUseCase,
)
from undead.domain.error import DomainError
from undead.domain.service import JWTService
from undead.interface.api.auth import optional_principal, require_principal
from undead.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/backpage", tags=["backpage"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post. Lengths are checked by the service."""

    category: str
    title: str
    body: str


class CreateReplyAPIRequest(BaseModel):
    """API request for replying to a post."""

    body: str


class VoteAPIRequest(BaseModel):
    """API request for voting. ``value`` must be 1 or -1."""

    value: int


class ReportAPIRequest(BaseModel):
    """API request for reporting a post or a reply."""

    reason: str
    details: str | None = None


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    use_case: FromDishka[ListPostsUseCase],
    category: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
) -> ListPostsResponse:
    """List this week's live posts, newest first."""
    try:
        return await use_case.execute(ListPostsRequest(category=category, page=page))
    except DomainError as e:
        raise to_http_exception(e, "List posts")
    except Exception as e:
        raise internal_error("List posts", e)


@router.post(
    "", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED
)
async def create_post(
    request: CreatePostAPIRequest,
    use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Publish a post. One post per author per rolling 24 hours."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            CreatePostRequest(
                principal=principal,
                category=request.category,
                title=request.title,
                body=request.body,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Post creation")
    except Exception as e:
        raise internal_error("Create post", e)


@router.get("/{slug}", response_model=GetPostResponse)
async def get_post(
    slug: str,
    use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a live post with its replies.

    Anonymous callers are allowed; ``user_vote`` is then 0. Expired posts
    respond 410 until the cleanup job purges them.
    """
    principal = optional_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(GetPostRequest(slug=slug, principal=principal))
    except DomainError as e:
        raise to_http_exception(e, "Get post")
    except Exception as e:
        raise internal_error("Get post", e)


@router.delete("/{slug}", response_model=DeletePostResponse)
async def delete_post(
    slug: str,
    use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    """Delete your own post (admins may delete any)."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(DeletePostRequest(principal=principal, slug=slug))
    except DomainError as e:
        raise to_http_exception(e, "Post deletion")
    except Exception as e:
        raise internal_error("Delete post", e)


@router.post(
    "/{slug}/reply",
    response_model=CreateReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    slug: str,
    request: CreateReplyAPIRequest,
    use_case: FromDishka[CreateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateReplyResponse:
    """Reply to a live post."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            CreateReplyRequest(principal=principal, slug=slug, body=request.body)
        )
    except DomainError as e:
        raise to_http_exception(e, "Reply")
    except Exception as e:
        raise internal_error("Create reply", e)


@router.delete("/{slug}/reply/{reply_id}", response_model=DeleteReplyResponse)
async def delete_reply(
    slug: str,
    reply_id: UUID,
    use_case: FromDishka[DeleteReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteReplyResponse:
    """Delete your own reply (admins may delete any)."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            DeleteReplyRequest(principal=principal, slug=slug, reply_id=str(reply_id))
        )
    except DomainError as e:
        raise to_http_exception(e, "Reply deletion")
    except Exception as e:
        raise internal_error("Delete reply", e)


@router.post("/{slug}/vote", response_model=VotePostResponse)
async def vote_post(
    slug: str,
    request: VoteAPIRequest,
    use_case: FromDishka[VotePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VotePostResponse:
    """Vote on a post.

    Repeating your vote removes it; voting the other way switches it.
    """
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            VotePostRequest(principal=principal, slug=slug, value=request.value)
        )
    except DomainError as e:
        raise to_http_exception(e, "Vote")
    except Exception as e:
        raise internal_error("Vote", e)


@router.post(
    "/{slug}/report",
    response_model=ReportPostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_post(
    slug: str,
    request: ReportAPIRequest,
    use_case: FromDishka[ReportPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReportPostResponse:
    """Report a post to the moderators."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            ReportPostRequest(
                principal=principal,
                slug=slug,
                reason=request.reason,
                details=request.details,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Report")
    except Exception as e:
        raise internal_error("Report post", e)


@router.post(
    "/{slug}/reply/{reply_id}/report",
    response_model=ReportReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_reply(
    slug: str,
    reply_id: UUID,
    request: ReportAPIRequest,
    use_case: FromDishka[ReportReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReportReplyResponse:
    """Report a reply to the moderators."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            ReportReplyRequest(
                principal=principal,
                slug=slug,
                reply_id=str(reply_id),
                reason=request.reason,
                details=request.details,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Report")
    except Exception as e:
        raise internal_error("Report reply", e)
