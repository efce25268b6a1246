"""Purchase download routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from undead.application.usecase.download import (
    DownloadStatusResponse,
    GetDownloadStatusRequest,
    GetDownloadStatusUseCase,
    RecordDownloadRequest,
    RecordDownloadUseCase,
)
from undead.domain.error import DomainError
from undead.domain.service import JWTService
from undead.interface.api.auth import require_principal
from undead.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/downloads", tags=["downloads"], route_class=DishkaRoute)


@router.get("/{purchase_id}/status", response_model=DownloadStatusResponse)
async def get_download_status(
    purchase_id: UUID,
    use_case: FromDishka[GetDownloadStatusUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DownloadStatusResponse:
    """How many downloads a purchase has left.

    Only the buyer or an admin may ask.
    """
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            GetDownloadStatusRequest(principal=principal, purchase_id=str(purchase_id))
        )
    except DomainError as e:
        raise to_http_exception(e, "Download status")
    except Exception as e:
        raise internal_error("Get download status", e)


@router.post("/{purchase_id}", response_model=DownloadStatusResponse)
async def record_download(
    purchase_id: UUID,
    use_case: FromDishka[RecordDownloadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DownloadStatusResponse:
    """Consume one download of a purchase.

    Called by the file-serving flow before streaming a file. Responds 403
    once the purchase has used all of its downloads.
    """
    principal = require_principal(jwt_service, auth_token)

    try:
        return await use_case.execute(
            RecordDownloadRequest(principal=principal, purchase_id=str(purchase_id))
        )
    except DomainError as e:
        raise to_http_exception(e, "Download")
    except Exception as e:
        raise internal_error("Record download", e)
