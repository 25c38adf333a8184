"""Application layer DI providers."""

from dishka import Scope, provide

from margin.application.usecase.comment import CreateCommentUseCase, GetCommentsUseCase
from margin.application.usecase.visit import GetVisitsUseCase, TrackVisitUseCase
from margin.domain.service import CommentService, VisitService
from margin.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    # Visit use cases
    @provide(scope=Scope.REQUEST)
    def get_track_visit_use_case(self, visit_service: VisitService) -> TrackVisitUseCase:
        """Provide track visit use case."""
        return TrackVisitUseCase(visit_service=visit_service)

    @provide(scope=Scope.REQUEST)
    def get_get_visits_use_case(self, visit_service: VisitService) -> GetVisitsUseCase:
        """Provide get visits use case."""
        return GetVisitsUseCase(visit_service=visit_service)
