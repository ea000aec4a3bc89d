"""
Name: Dependency Injection Container

Responsibilities:
  - Wire repositories, storage, geocoding and identity services
  - Provide factory methods for use cases
  - Own the lifecycle of pooled resources (DB pool, HTTP clients)

Collaborators:
  - infrastructure.repositories: Postgres* and InMemory* repositories
  - infrastructure.storage: local / WebDAV / S3 adapters
  - infrastructure.services: GoogleGeocodingService
  - api/main.py: builds the container in the lifespan, stores it on app.state

Constraints:
  - Manual DI; no module-level singletons
  - Handlers reach the container only through get_container()

Notes:
  - APP_ENV=test wires in-memory repositories and no database pool
  - Tests construct Container directly with fakes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from fastapi import Request
from psycopg_pool import AsyncConnectionPool

from .application.usecases import (
    ChangePasswordUseCase,
    DownloadImageUseCase,
    GetEventUseCase,
    GetInfoScreenUseCase,
    GetOrganizerProfileUseCase,
    ListActiveInfoScreensUseCase,
    ListEventsUseCase,
    ManageEventUseCase,
    ManageInfoScreenUseCase,
    SelectOrganizerUseCase,
    UpdateOrganizerProfileUseCase,
    UploadImageUseCase,
)
from .crosscutting.config import Settings
from .crosscutting.logger import logger
from .domain.repositories import (
    EventRepository,
    ImageRepository,
    InfoScreenRepository,
    OrganizerRepository,
    UserRepository,
)
from .domain.services import FileStoragePort, GeocodingService
from .identity.authentication import Authenticator
from .identity.gate import AuthorizationGate
from .identity.passwords import PasswordHasher
from .identity.sessions import SessionSettings
from .infrastructure.db.pool import close_pool, open_pool, ping
from .infrastructure.repositories import (
    InMemoryEventRepository,
    InMemoryImageRepository,
    InMemoryInfoScreenRepository,
    InMemoryOrganizerRepository,
    InMemoryUserRepository,
    PostgresEventRepository,
    PostgresImageRepository,
    PostgresInfoScreenRepository,
    PostgresOrganizerRepository,
    PostgresUserRepository,
)
from .infrastructure.services import GoogleGeocodingService
from .infrastructure.storage import (
    LocalFileStorageAdapter,
    S3Config,
    S3FileStorageAdapter,
    WebDavConfig,
    WebDavFileStorageAdapter,
)


@dataclass
class Container:
    """R: Composition root handed to every request through app.state."""

    settings: Settings
    users: UserRepository
    organizers: OrganizerRepository
    events: EventRepository
    info_screens: InfoScreenRepository
    images: ImageRepository
    storage: FileStoragePort
    geocoder: Optional[GeocodingService] = None
    pool: Optional[AsyncConnectionPool] = None
    hasher: PasswordHasher = field(init=False)
    session_settings: SessionSettings = field(init=False)
    gate: AuthorizationGate = field(init=False)
    authenticator: Authenticator = field(init=False)
    _closeables: List[Any] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.hasher = PasswordHasher()
        self.session_settings = SessionSettings.from_settings(self.settings)
        self.gate = AuthorizationGate(self.users, self.session_settings)
        self.authenticator = Authenticator(self.users, self.hasher)

    # -- use case factories -------------------------------------------------

    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            self.users,
            self.hasher,
            min_length=self.settings.password_min_length,
            max_length=self.settings.password_max_length,
        )

    def list_events_use_case(self) -> ListEventsUseCase:
        return ListEventsUseCase(self.events, self.organizers)

    def get_event_use_case(self) -> GetEventUseCase:
        return GetEventUseCase(self.events)

    def manage_event_use_case(self) -> ManageEventUseCase:
        return ManageEventUseCase(self.events, self.organizers, self.geocoder)

    def list_info_screens_use_case(self) -> ListActiveInfoScreensUseCase:
        return ListActiveInfoScreensUseCase(self.info_screens)

    def get_info_screen_use_case(self) -> GetInfoScreenUseCase:
        return GetInfoScreenUseCase(self.info_screens)

    def manage_info_screen_use_case(self) -> ManageInfoScreenUseCase:
        return ManageInfoScreenUseCase(self.info_screens)

    def get_profile_use_case(self) -> GetOrganizerProfileUseCase:
        return GetOrganizerProfileUseCase(self.organizers)

    def update_profile_use_case(self) -> UpdateOrganizerProfileUseCase:
        return UpdateOrganizerProfileUseCase(self.organizers)

    def select_organizer_use_case(self) -> SelectOrganizerUseCase:
        return SelectOrganizerUseCase(self.users, self.organizers)

    def upload_image_use_case(self) -> UploadImageUseCase:
        return UploadImageUseCase(
            self.images,
            self.storage,
            prefix=self.settings.image_prefix,
            max_bytes=self.settings.max_upload_bytes,
        )

    def download_image_use_case(self) -> DownloadImageUseCase:
        return DownloadImageUseCase(
            self.images, self.storage, prefix=self.settings.image_prefix
        )

    # -- lifecycle ----------------------------------------------------------

    async def database_ok(self) -> bool:
        if self.pool is None:
            return True
        return await ping(self.pool)

    async def aclose(self) -> None:
        for resource in self._closeables:
            await resource.aclose()
        self._closeables.clear()
        await close_pool(self.pool)
        self.pool = None


def build_storage(settings: Settings) -> FileStoragePort:
    """R: Pick the object storage adapter named by STORAGE_BACKEND."""
    if settings.storage_backend == "webdav":
        return WebDavFileStorageAdapter(
            WebDavConfig(
                base_url=settings.storage_url,
                username=settings.storage_username,
                password=settings.storage_password,
            )
        )
    if settings.storage_backend == "s3":
        return S3FileStorageAdapter(
            S3Config(
                bucket=settings.s3_bucket,
                access_key=settings.s3_access_key,
                secret_key=settings.s3_secret_key,
                region=settings.s3_region or None,
                endpoint_url=settings.s3_endpoint_url or None,
            )
        )
    return LocalFileStorageAdapter(settings.storage_local_root)


def build_geocoder(settings: Settings) -> Optional[GoogleGeocodingService]:
    if not settings.geocoding_enabled():
        logger.info("Geocoding disabled (no GCP_API_KEY)")
        return None
    return GoogleGeocodingService(
        api_key=settings.gcp_api_key,
        language=settings.geocoding_language,
        region=settings.geocoding_region,
        timeout_seconds=settings.geocoding_timeout_seconds,
    )


def build_in_memory_container(
    settings: Settings, storage: Optional[FileStoragePort] = None
) -> Container:
    """R: Container backed by in-memory repositories (tests, local dev)."""
    return Container(
        settings=settings,
        users=InMemoryUserRepository(),
        organizers=InMemoryOrganizerRepository(),
        events=InMemoryEventRepository(),
        info_screens=InMemoryInfoScreenRepository(),
        images=InMemoryImageRepository(),
        storage=storage or build_storage(settings),
    )


async def build_container(settings: Settings) -> Container:
    """R: Production wiring: open the pool and build Postgres repositories."""
    if settings.is_test():
        return build_in_memory_container(settings)

    pool = await open_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        statement_timeout_ms=settings.db_statement_timeout_ms,
    )
    storage = build_storage(settings)
    geocoder = build_geocoder(settings)
    container = Container(
        settings=settings,
        users=PostgresUserRepository(pool),
        organizers=PostgresOrganizerRepository(pool),
        events=PostgresEventRepository(pool),
        info_screens=PostgresInfoScreenRepository(pool),
        images=PostgresImageRepository(pool),
        storage=storage,
        geocoder=geocoder,
        pool=pool,
    )
    container._closeables.extend(
        resource for resource in (storage, geocoder) if hasattr(resource, "aclose")
    )
    return container


def get_container(request: Request) -> Container:
    """R: FastAPI dependency returning the app's container."""
    return request.app.state.container
