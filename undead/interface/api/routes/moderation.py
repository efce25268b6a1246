"""Admin moderation routes for BackPage."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel

from undead.application.usecase.moderation import (
    ListAllPostsRequest,
    ListAllPostsResponse,
    ListAllPostsUseCase,
    ListReportsRequest,
    ListReportsResponse,
    ListReportsUseCase,
    RemovePostRequest,
    RemovePostResponse,
    RemovePostUseCase,
    RemoveReplyRequest,
    RemoveReplyResponse,
    RemoveReplyUseCase,
    ResolveReportRequest,
    ResolveReportResponse,
    ResolveReportUseCase,
)
from undead.domain.error import DomainError
from undead.domain.service import JWTService
from undead.interface.api.auth import require_principal
from undead.interface.error import internal_error, to_http_exception

router = APIRouter(
    prefix="/admin/backpage", tags=["moderation"], route_class=DishkaRoute
)


class ResolveReportAPIRequest(BaseModel):
    """API request for closing a report."""

    status: str  # RESOLVED or DISMISSED


class RemovePostAPIRequest(BaseModel):
    """API request for removing a post."""

    reason: str | None = None


class RemoveReplyAPIRequest(BaseModel):
    """API request for removing a reply, optionally closing the report behind it."""

    reason: str | None = None
    report_id: UUID | None = None


@router.get("", response_model=ListAllPostsResponse)
async def list_all_posts(
    use_case: FromDishka[ListAllPostsUseCase],
    jwt_service: FromDishka[JWTService],
    state: str | None = Query(default=None),
    category: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListAllPostsResponse:
    """Every post, removed and expired included, newest first."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            ListAllPostsRequest(
                principal=principal,
                state=state,
                category=category,
                page=page,
                limit=limit,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "List posts")
    except Exception as e:
        raise internal_error("List all posts", e)


@router.get("/reports", response_model=ListReportsResponse)
async def list_reports(
    use_case: FromDishka[ListReportsUseCase],
    jwt_service: FromDishka[JWTService],
    status: str | None = Query(default="PENDING"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListReportsResponse:
    """Reports queue, newest first. Defaults to pending reports."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            ListReportsRequest(
                principal=principal, status=status, limit=limit, offset=offset
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "List reports")
    except Exception as e:
        raise internal_error("List reports", e)


@router.post("/reports/{report_id}", response_model=ResolveReportResponse)
async def resolve_report(
    report_id: UUID,
    request: ResolveReportAPIRequest,
    use_case: FromDishka[ResolveReportUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ResolveReportResponse:
    """Mark a report resolved or dismissed."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            ResolveReportRequest(
                principal=principal, report_id=str(report_id), status=request.status
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Resolve report")
    except Exception as e:
        raise internal_error("Resolve report", e)


@router.post("/{post_id}/remove", response_model=RemovePostResponse)
async def remove_post(
    post_id: UUID,
    request: RemovePostAPIRequest,
    use_case: FromDishka[RemovePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RemovePostResponse:
    """Remove a post from the board, recording the reason."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            RemovePostRequest(
                principal=principal, post_id=str(post_id), reason=request.reason
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Remove post")
    except Exception as e:
        raise internal_error("Remove post", e)


@router.post("/replies/{reply_id}/remove", response_model=RemoveReplyResponse)
async def remove_reply(
    reply_id: UUID,
    request: RemoveReplyAPIRequest,
    use_case: FromDishka[RemoveReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RemoveReplyResponse:
    """Remove a reply, recording the reason."""
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            RemoveReplyRequest(
                principal=principal,
                reply_id=str(reply_id),
                reason=request.reason,
                report_id=str(request.report_id) if request.report_id else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Remove reply")
    except Exception as e:
        raise internal_error("Remove reply", e)
