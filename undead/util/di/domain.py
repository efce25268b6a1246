"""Domain layer DI providers."""

from dishka import Scope, provide

from undead.config import AuthSettings
from undead.domain.repository import (
    BackpagePostRepository,
    BackpageReplyRepository,
    BackpageReportRepository,
    BackpageVoteRepository,
    PurchaseRepository,
)
from undead.domain.service import (
    BackpageReplyService,
    BackpageReportService,
    BackpageService,
    BackpageVoteService,
    DownloadService,
    JWTService,
)
from undead.domain.value.limits import BackpageLimits
from undead.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_download_service(
        self, purchase_repository: PurchaseRepository
    ) -> DownloadService:
        """Provide download entitlement domain service."""
        return DownloadService(purchase_repository=purchase_repository)

    @provide
    def get_backpage_service(
        self, post_repository: BackpagePostRepository, limits: BackpageLimits
    ) -> BackpageService:
        """Provide BackPage post domain service."""
        return BackpageService(post_repository=post_repository, limits=limits)

    @provide
    def get_backpage_reply_service(
        self,
        reply_repository: BackpageReplyRepository,
        post_repository: BackpagePostRepository,
        backpage_service: BackpageService,
    ) -> BackpageReplyService:
        """Provide BackPage reply domain service."""
        return BackpageReplyService(
            reply_repository=reply_repository,
            post_repository=post_repository,
            backpage_service=backpage_service,
        )

    @provide
    def get_backpage_vote_service(
        self,
        vote_repository: BackpageVoteRepository,
        post_repository: BackpagePostRepository,
        backpage_service: BackpageService,
    ) -> BackpageVoteService:
        """Provide BackPage vote domain service."""
        return BackpageVoteService(
            vote_repository=vote_repository,
            post_repository=post_repository,
            backpage_service=backpage_service,
        )

    @provide
    def get_backpage_report_service(
        self,
        report_repository: BackpageReportRepository,
        reply_repository: BackpageReplyRepository,
        backpage_service: BackpageService,
    ) -> BackpageReportService:
        """Provide BackPage report domain service."""
        return BackpageReportService(
            report_repository=report_repository,
            reply_repository=reply_repository,
            backpage_service=backpage_service,
        )
