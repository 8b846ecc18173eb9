"""Domain layer DI providers."""

from dishka import Scope, provide

from skillswap.config import AuthSettings, ConversationSettings, StoreSettings
from skillswap.domain.repository import (
    MatchRepository,
    MessageRepository,
    NotificationRepository,
    SkillRepository,
    UserSkillRepository,
)
from skillswap.domain.service import (
    ConversationService,
    DiscoveryService,
    JWTService,
    LiveOutbox,
    LiveTransport,
    MatchService,
    NotificationService,
    PresenceRegistry,
)
from skillswap.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    Conversation presence lives for the whole process.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_presence_registry(self) -> PresenceRegistry:
        return PresenceRegistry()

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        live_transport: LiveTransport,
        outbox: LiveOutbox,
        store_settings: StoreSettings,
    ) -> NotificationService:
        """Provide notification dispatcher."""
        return NotificationService(
            notification_repository=notification_repository,
            live_transport=live_transport,
            outbox=outbox,
            store_timeout=store_settings.timeout_seconds,
        )

    @provide
    def get_conversation_service(
        self,
        match_repository: MatchRepository,
        message_repository: MessageRepository,
        notification_service: NotificationService,
        live_transport: LiveTransport,
        outbox: LiveOutbox,
        presence: PresenceRegistry,
        conversation_settings: ConversationSettings,
        store_settings: StoreSettings,
    ) -> ConversationService:
        """Provide conversation domain service."""
        return ConversationService(
            match_repository=match_repository,
            message_repository=message_repository,
            notification_service=notification_service,
            live_transport=live_transport,
            outbox=outbox,
            presence=presence,
            settings=conversation_settings,
            store_timeout=store_settings.timeout_seconds,
        )

    @provide
    def get_match_service(
        self,
        match_repository: MatchRepository,
        skill_repository: SkillRepository,
        conversation_service: ConversationService,
        notification_service: NotificationService,
        store_settings: StoreSettings,
    ) -> MatchService:
        """Provide match lifecycle domain service."""
        return MatchService(
            match_repository=match_repository,
            skill_repository=skill_repository,
            conversation_service=conversation_service,
            notification_service=notification_service,
            store_timeout=store_settings.timeout_seconds,
        )

    @provide
    def get_discovery_service(
        self,
        user_skill_repository: UserSkillRepository,
        skill_repository: SkillRepository,
        store_settings: StoreSettings,
    ) -> DiscoveryService:
        """Provide discovery domain service."""
        return DiscoveryService(
            user_skill_repository=user_skill_repository,
            skill_repository=skill_repository,
            store_timeout=store_settings.timeout_seconds,
        )
