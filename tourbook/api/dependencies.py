from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from tourbook.api.deps import AsyncSessionLocal
from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.catalog_repo import TourRepo, UserRepo
from tourbook.application.interfaces.clock import Clock, SystemClock
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.application.interfaces.document_renderer import DocumentRenderer, MessagingGateway
from tourbook.application.interfaces.id_generator import IdGenerator, UUIDIdGenerator
from tourbook.application.interfaces.notification_gateway import NotificationGateway
from tourbook.application.interfaces.notification_outbox_repo import NotificationOutboxRepo
from tourbook.application.interfaces.transaction_manager import TransactionManager
from tourbook.application.services import (
    BookingDocumentResolver,
    BookingNotifier,
    CancellationCascade,
    NotificationDispatcher,
    RelationLoader,
    TripProjector,
)
from tourbook.application.use_cases import (
    CancelTripUseCase,
    ConfirmPaymentUseCase,
    CreateGuideBookingUseCase,
    CreateShadowBookingUseCase,
    CreateTourBookingUseCase,
    DownloadInvoiceUseCase,
    GetTripUseCase,
    ListGuideBookingsUseCase,
    ListUserTripsUseCase,
    ProcessNotificationOutboxUseCase,
    SendConfirmationEmailUseCase,
    UpdateBookingStatusUseCase,
)
from tourbook.config import Settings, get_settings
from tourbook.domain.entities.user import User
from tourbook.domain.errors import AuthenticationError
from tourbook.infrastructure.db.repositories import (
    BookingRepoSQL,
    CustomTripRepoSQL,
    NotificationOutboxRepoSQL,
    TourRepoSQL,
    UserRepoSQL,
)
from tourbook.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from tourbook.infrastructure.gateways import (
    MessagingGatewayHTTP,
    NotificationGatewayHTTP,
    PdfInvoiceRenderer,
)
from tourbook.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryCustomTripRepo,
    InMemoryNotificationOutboxRepo,
    InMemoryTourRepo,
    InMemoryTransactionManager,
    InMemoryUserRepo,
    RecordingMessagingGateway,
    RecordingNotificationGateway,
)


@dataclass
class Adapters:
    """Puertos resueltos para una petición (in-memory o SQL)."""

    booking_repo: BookingRepo
    custom_trip_repo: CustomTripRepo
    tour_repo: TourRepo
    user_repo: UserRepo
    outbox_repo: NotificationOutboxRepo
    notification_gateway: NotificationGateway
    messaging_gateway: MessagingGateway
    renderer: DocumentRenderer
    clock: Clock
    id_generator: IdGenerator
    tx_manager: TransactionManager


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        try:
            yield session
            if session.in_transaction():
                await session.commit()
        except Exception:
            await session.rollback()
            raise


def _notification_gateway(settings: Settings) -> NotificationGateway:
    if settings.notification_service_url:
        return NotificationGatewayHTTP(
            base_url=settings.notification_service_url,
            timeout_seconds=settings.notification_timeout_seconds,
        )
    return RecordingNotificationGateway()


def _messaging_gateway(settings: Settings) -> MessagingGateway:
    if settings.messaging_service_url:
        return MessagingGatewayHTTP(
            base_url=settings.messaging_service_url,
            timeout_seconds=settings.messaging_timeout_seconds,
        )
    return RecordingMessagingGateway()


@lru_cache(maxsize=1)
def get_in_memory_adapters() -> Adapters:
    settings = get_settings()
    return Adapters(
        booking_repo=InMemoryBookingRepo(),
        custom_trip_repo=InMemoryCustomTripRepo(),
        tour_repo=InMemoryTourRepo(),
        user_repo=InMemoryUserRepo(),
        outbox_repo=InMemoryNotificationOutboxRepo(),
        notification_gateway=_notification_gateway(settings),
        messaging_gateway=_messaging_gateway(settings),
        renderer=PdfInvoiceRenderer(),
        clock=SystemClock(),
        id_generator=UUIDIdGenerator(),
        tx_manager=InMemoryTransactionManager(),
    )


def get_adapters(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
) -> Adapters:
    if settings.use_in_memory:
        return get_in_memory_adapters()

    if not session:
        raise RuntimeError("DB session not available")

    return Adapters(
        booking_repo=BookingRepoSQL(session),
        custom_trip_repo=CustomTripRepoSQL(session),
        tour_repo=TourRepoSQL(session),
        user_repo=UserRepoSQL(session),
        outbox_repo=NotificationOutboxRepoSQL(session),
        notification_gateway=_notification_gateway(settings),
        messaging_gateway=_messaging_gateway(settings),
        renderer=PdfInvoiceRenderer(),
        clock=SystemClock(),
        id_generator=UUIDIdGenerator(),
        tx_manager=SQLAlchemyTransactionManager(session),
    )


def build_use_cases(adapters: Adapters, settings: Settings) -> dict:
    a = adapters
    loader = RelationLoader(tour_repo=a.tour_repo, user_repo=a.user_repo)
    projector = TripProjector(default_location=settings.default_location)
    dispatcher = NotificationDispatcher(
        outbox_repo=a.outbox_repo,
        gateway=a.notification_gateway,
        clock=a.clock,
        transaction_manager=a.tx_manager,
        max_attempts=settings.notification_max_attempts,
        base_backoff_seconds=settings.notification_backoff_seconds,
    )
    notifier = BookingNotifier(dispatcher)
    cascade = CancellationCascade(booking_repo=a.booking_repo, custom_trip_repo=a.custom_trip_repo)
    resolver = BookingDocumentResolver(
        booking_repo=a.booking_repo,
        custom_trip_repo=a.custom_trip_repo,
        relation_loader=loader,
    )

    return {
        "create_tour_booking": CreateTourBookingUseCase(
            booking_repo=a.booking_repo,
            tour_repo=a.tour_repo,
            relation_loader=loader,
            projector=projector,
            notifier=notifier,
            clock=a.clock,
            id_generator=a.id_generator,
            transaction_manager=a.tx_manager,
        ),
        "create_guide_booking": CreateGuideBookingUseCase(
            booking_repo=a.booking_repo,
            user_repo=a.user_repo,
            relation_loader=loader,
            projector=projector,
            notifier=notifier,
            clock=a.clock,
            id_generator=a.id_generator,
            transaction_manager=a.tx_manager,
            rate_per_person_per_day=settings.guide_rate_per_person_per_day,
        ),
        "list_user_trips": ListUserTripsUseCase(
            booking_repo=a.booking_repo,
            custom_trip_repo=a.custom_trip_repo,
            relation_loader=loader,
            projector=projector,
            default_page_size=settings.default_page_size,
            max_page_size=settings.max_page_size,
        ),
        "list_guide_bookings": ListGuideBookingsUseCase(
            booking_repo=a.booking_repo,
            relation_loader=loader,
            projector=projector,
            default_page_size=settings.default_page_size,
            max_page_size=settings.max_page_size,
        ),
        "get_trip": GetTripUseCase(
            booking_repo=a.booking_repo,
            custom_trip_repo=a.custom_trip_repo,
            relation_loader=loader,
            projector=projector,
        ),
        "cancel_trip": CancelTripUseCase(
            booking_repo=a.booking_repo,
            custom_trip_repo=a.custom_trip_repo,
            cascade=cascade,
            relation_loader=loader,
            projector=projector,
            notifier=notifier,
            clock=a.clock,
            transaction_manager=a.tx_manager,
        ),
        "update_booking_status": UpdateBookingStatusUseCase(
            booking_repo=a.booking_repo,
            relation_loader=loader,
            projector=projector,
            clock=a.clock,
            transaction_manager=a.tx_manager,
        ),
        "confirm_payment": ConfirmPaymentUseCase(
            booking_repo=a.booking_repo,
            custom_trip_repo=a.custom_trip_repo,
            relation_loader=loader,
            projector=projector,
            clock=a.clock,
            transaction_manager=a.tx_manager,
        ),
        "create_shadow_booking": CreateShadowBookingUseCase(
            booking_repo=a.booking_repo,
            custom_trip_repo=a.custom_trip_repo,
            relation_loader=loader,
            projector=projector,
            clock=a.clock,
            id_generator=a.id_generator,
            transaction_manager=a.tx_manager,
        ),
        "download_invoice": DownloadInvoiceUseCase(resolver=resolver, renderer=a.renderer),
        "send_confirmation_email": SendConfirmationEmailUseCase(
            resolver=resolver, messaging_gateway=a.messaging_gateway
        ),
        "process_notification_outbox": ProcessNotificationOutboxUseCase(
            outbox_repo=a.outbox_repo,
            dispatcher=dispatcher,
            clock=a.clock,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    adapters: Adapters = Depends(get_adapters),
) -> dict:
    return build_use_cases(adapters, settings)


async def get_current_user(
    user_id: str | None = Header(default=None, alias="X-User-Id"),
    adapters: Adapters = Depends(get_adapters),
) -> User:
    """La autenticación es externa; el gateway de entrada propaga el id en X-User-Id."""
    if not user_id:
        raise AuthenticationError()
    user = await adapters.user_repo.get_by_id(user_id)
    if not user or not user.is_active:
        raise AuthenticationError("Unknown or inactive user")
    return user
