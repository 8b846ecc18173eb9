"""Application layer DI providers."""

from dishka import Scope, provide

from skillswap.application.usecase.conversation import (
    GetMessagesUseCase,
    ListConversationsUseCase,
    MarkConversationReadUseCase,
    OpenMessageStreamUseCase,
    SendMessageUseCase,
)
from skillswap.application.usecase.discovery import (
    DeclareSkillUseCase,
    FindLearnersUseCase,
    FindTeachersUseCase,
    ListDeclarationsUseCase,
    RemoveDeclarationUseCase,
    UpdateDeclarationUseCase,
)
from skillswap.application.usecase.match import (
    CancelMatchUseCase,
    CompleteMatchUseCase,
    GetMatchUseCase,
    ListMatchesUseCase,
    RequestMatchUseCase,
    RespondToMatchUseCase,
    ReviewEligibilityUseCase,
)
from skillswap.application.usecase.notification import (
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
    OpenNotificationStreamUseCase,
)
from skillswap.domain.repository import UnitOfWork
from skillswap.domain.service import (
    ConversationService,
    DiscoveryService,
    MatchService,
    NotificationService,
)
from skillswap.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Match use cases
    @provide(scope=Scope.REQUEST)
    def get_request_match_use_case(
        self, match_service: MatchService
    ) -> RequestMatchUseCase:
        """Provide request match use case."""
        return RequestMatchUseCase(match_service=match_service)

    @provide(scope=Scope.REQUEST)
    def get_respond_to_match_use_case(
        self, match_service: MatchService
    ) -> RespondToMatchUseCase:
        """Provide respond to match use case."""
        return RespondToMatchUseCase(match_service=match_service)

    @provide(scope=Scope.REQUEST)
    def get_complete_match_use_case(
        self, match_service: MatchService
    ) -> CompleteMatchUseCase:
        """Provide complete match use case."""
        return CompleteMatchUseCase(match_service=match_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_match_use_case(self, match_service: MatchService) -> CancelMatchUseCase:
        """Provide cancel match use case."""
        return CancelMatchUseCase(match_service=match_service)

    @provide(scope=Scope.REQUEST)
    def get_get_match_use_case(self, match_service: MatchService) -> GetMatchUseCase:
        """Provide get match use case."""
        return GetMatchUseCase(match_service=match_service)

    @provide(scope=Scope.REQUEST)
    def get_list_matches_use_case(self, match_service: MatchService) -> ListMatchesUseCase:
        """Provide list matches use case."""
        return ListMatchesUseCase(match_service=match_service)

    @provide(scope=Scope.REQUEST)
    def get_review_eligibility_use_case(
        self, match_service: MatchService
    ) -> ReviewEligibilityUseCase:
        """Provide review eligibility use case."""
        return ReviewEligibilityUseCase(match_service=match_service)

    # Conversation use cases
    @provide(scope=Scope.REQUEST)
    def get_send_message_use_case(
        self, conversation_service: ConversationService
    ) -> SendMessageUseCase:
        """Provide send message use case."""
        return SendMessageUseCase(conversation_service=conversation_service)

    @provide(scope=Scope.REQUEST)
    def get_get_messages_use_case(
        self, conversation_service: ConversationService
    ) -> GetMessagesUseCase:
        """Provide get messages use case."""
        return GetMessagesUseCase(conversation_service=conversation_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_conversation_read_use_case(
        self, conversation_service: ConversationService
    ) -> MarkConversationReadUseCase:
        """Provide mark conversation read use case."""
        return MarkConversationReadUseCase(conversation_service=conversation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_conversations_use_case(
        self, conversation_service: ConversationService
    ) -> ListConversationsUseCase:
        """Provide list conversations use case."""
        return ListConversationsUseCase(conversation_service=conversation_service)

    @provide(scope=Scope.REQUEST)
    def get_open_message_stream_use_case(
        self, conversation_service: ConversationService, unit_of_work: UnitOfWork
    ) -> OpenMessageStreamUseCase:
        """Provide open message stream use case."""
        return OpenMessageStreamUseCase(
            conversation_service=conversation_service, unit_of_work=unit_of_work
        )

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        """Provide mark notification read use case."""
        return MarkNotificationReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_notifications_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllNotificationsReadUseCase:
        """Provide mark all notifications read use case."""
        return MarkAllNotificationsReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_open_notification_stream_use_case(
        self, notification_service: NotificationService, unit_of_work: UnitOfWork
    ) -> OpenNotificationStreamUseCase:
        """Provide open notification stream use case."""
        return OpenNotificationStreamUseCase(
            notification_service=notification_service, unit_of_work=unit_of_work
        )

    # Discovery use cases
    @provide(scope=Scope.REQUEST)
    def get_find_teachers_use_case(
        self, discovery_service: DiscoveryService
    ) -> FindTeachersUseCase:
        """Provide find teachers use case."""
        return FindTeachersUseCase(discovery_service=discovery_service)

    @provide(scope=Scope.REQUEST)
    def get_find_learners_use_case(
        self, discovery_service: DiscoveryService
    ) -> FindLearnersUseCase:
        """Provide find learners use case."""
        return FindLearnersUseCase(discovery_service=discovery_service)

    @provide(scope=Scope.REQUEST)
    def get_declare_skill_use_case(
        self, discovery_service: DiscoveryService
    ) -> DeclareSkillUseCase:
        """Provide declare skill use case."""
        return DeclareSkillUseCase(discovery_service=discovery_service)

    @provide(scope=Scope.REQUEST)
    def get_update_declaration_use_case(
        self, discovery_service: DiscoveryService
    ) -> UpdateDeclarationUseCase:
        """Provide update declaration use case."""
        return UpdateDeclarationUseCase(discovery_service=discovery_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_declaration_use_case(
        self, discovery_service: DiscoveryService
    ) -> RemoveDeclarationUseCase:
        """Provide remove declaration use case."""
        return RemoveDeclarationUseCase(discovery_service=discovery_service)

    @provide(scope=Scope.REQUEST)
    def get_list_declarations_use_case(
        self, discovery_service: DiscoveryService
    ) -> ListDeclarationsUseCase:
        """Provide list declarations use case."""
        return ListDeclarationsUseCase(discovery_service=discovery_service)
