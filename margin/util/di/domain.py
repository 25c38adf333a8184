"""Domain layer DI providers."""

from dishka import Scope, provide

from margin.config import VisitSettings
from margin.domain.repository import CommentRepository, VisitLog
from margin.domain.service import CommentService, VisitService
from margin.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services are REQUEST-scoped; the stores they wrap are shared.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_visit_service(
        self, visit_log: VisitLog, visit_settings: VisitSettings
    ) -> VisitService:
        """Provide visit domain service."""
        return VisitService(visit_log=visit_log, settings=visit_settings)
