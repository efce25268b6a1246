"""Application layer DI providers."""

from dishka import Scope, provide

from undead.application.usecase.backpage import (
    CleanupExpiredPostsUseCase,
    CreatePostUseCase,
    CreateReplyUseCase,
    DeletePostUseCase,
    DeleteReplyUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    ReportPostUseCase,
    ReportReplyUseCase,
    VotePostUseCase,
)
from undead.application.usecase.download import (
    GetDownloadStatusUseCase,
    RecordDownloadUseCase,
)
from undead.application.usecase.moderation import (
    ListAllPostsUseCase,
    ListReportsUseCase,
    RemovePostUseCase,
    RemoveReplyUseCase,
    ResolveReportUseCase,
)
from undead.domain.repository import PurchaseRepository
from undead.domain.service import (
    BackpageReplyService,
    BackpageReportService,
    BackpageService,
    BackpageVoteService,
    DownloadService,
)
from undead.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Download use cases
    @provide
    def get_download_status_use_case(
        self,
        purchase_repository: PurchaseRepository,
        download_service: DownloadService,
    ) -> GetDownloadStatusUseCase:
        """Provide get download status use case."""
        return GetDownloadStatusUseCase(
            purchase_repository=purchase_repository,
            download_service=download_service,
        )

    @provide
    def get_record_download_use_case(
        self,
        purchase_repository: PurchaseRepository,
        download_service: DownloadService,
    ) -> RecordDownloadUseCase:
        """Provide record download use case."""
        return RecordDownloadUseCase(
            purchase_repository=purchase_repository,
            download_service=download_service,
        )

    # BackPage use cases
    @provide
    def get_create_post_use_case(
        self, backpage_service: BackpageService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(backpage_service=backpage_service)

    @provide
    def get_get_post_use_case(
        self,
        backpage_service: BackpageService,
        reply_service: BackpageReplyService,
        vote_service: BackpageVoteService,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            backpage_service=backpage_service,
            reply_service=reply_service,
            vote_service=vote_service,
        )

    @provide
    def get_list_posts_use_case(
        self, backpage_service: BackpageService
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(backpage_service=backpage_service)

    @provide
    def get_delete_post_use_case(
        self, backpage_service: BackpageService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(backpage_service=backpage_service)

    @provide
    def get_create_reply_use_case(
        self, reply_service: BackpageReplyService
    ) -> CreateReplyUseCase:
        """Provide create reply use case."""
        return CreateReplyUseCase(reply_service=reply_service)

    @provide
    def get_delete_reply_use_case(
        self, reply_service: BackpageReplyService
    ) -> DeleteReplyUseCase:
        """Provide delete reply use case."""
        return DeleteReplyUseCase(reply_service=reply_service)

    @provide
    def get_vote_post_use_case(
        self, vote_service: BackpageVoteService
    ) -> VotePostUseCase:
        """Provide vote use case."""
        return VotePostUseCase(vote_service=vote_service)

    @provide
    def get_report_post_use_case(
        self, report_service: BackpageReportService
    ) -> ReportPostUseCase:
        """Provide report post use case."""
        return ReportPostUseCase(report_service=report_service)

    @provide
    def get_report_reply_use_case(
        self, report_service: BackpageReportService
    ) -> ReportReplyUseCase:
        """Provide report reply use case."""
        return ReportReplyUseCase(report_service=report_service)

    @provide
    def get_cleanup_expired_posts_use_case(
        self, backpage_service: BackpageService
    ) -> CleanupExpiredPostsUseCase:
        """Provide cleanup use case."""
        return CleanupExpiredPostsUseCase(backpage_service=backpage_service)

    # Moderation use cases
    @provide
    def get_list_reports_use_case(
        self, report_service: BackpageReportService
    ) -> ListReportsUseCase:
        """Provide list reports use case."""
        return ListReportsUseCase(report_service=report_service)

    @provide
    def get_resolve_report_use_case(
        self, report_service: BackpageReportService
    ) -> ResolveReportUseCase:
        """Provide resolve report use case."""
        return ResolveReportUseCase(report_service=report_service)

    @provide
    def get_remove_post_use_case(
        self, backpage_service: BackpageService
    ) -> RemovePostUseCase:
        """Provide remove post use case."""
        return RemovePostUseCase(backpage_service=backpage_service)

    @provide
    def get_remove_reply_use_case(
        self,
        reply_service: BackpageReplyService,
        report_service: BackpageReportService,
    ) -> RemoveReplyUseCase:
        """Provide remove reply use case."""
        return RemoveReplyUseCase(
            reply_service=reply_service, report_service=report_service
        )

    @provide
    def get_list_all_posts_use_case(
        self,
        backpage_service: BackpageService,
        report_service: BackpageReportService,
    ) -> ListAllPostsUseCase:
        """Provide admin post listing use case."""
        return ListAllPostsUseCase(
            backpage_service=backpage_service, report_service=report_service
        )
