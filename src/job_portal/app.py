"""Job portal FastAPI application.

``ServiceContainer`` is the composition root: it builds the key store,
repositories and services once per application and is stored on
``app.state.container`` where the dependency providers find it.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .__version__ import __version__
from .api.exception_handlers import register_exception_handlers
from .config import CacheBackendType, Settings, get_settings
from .database import DatabaseManager, ensure_schema
from .features.applications.repositories import (
    ApplicationDatabaseRepository,
    InMemoryApplicationRepository,
)
from .features.applications.services import ApplicationLifecycle
from .features.auth.services import TokenVerifier
from .features.cache import KeyStore, MemoryKeyStore, RedisKeyStore, ResponseCache
from .features.jobs.repositories import InMemoryJobRepository, JobDatabaseRepository
from .features.jobs.services import JobMutationCoordinator
from .features.notifications.adapters import LoggingNotifier
from .features.notifications.services import NotificationDispatcher
from .features.resumes.adapters import LocalResumeStorage
from .features.resumes.repositories import InMemoryResumeRepository, ResumeDatabaseRepository
from .features.resumes.services import ResumeService
from .features.system.services import SystemService
from .features.users.repositories import InMemoryUserRepository, UserDatabaseRepository
from .features.users.services import UserService

logger = logging.getLogger(__name__)


def build_key_store(settings: Settings) -> Optional[KeyStore]:
    """Create the key store selected by settings; None disables caching."""
    backend = settings.effective_cache_backend
    if backend == CacheBackendType.NONE:
        return None
    if backend == CacheBackendType.REDIS:
        if not settings.redis_url:
            logger.warning("CACHE_BACKEND=redis without REDIS_URL; falling back to in-memory cache")
            return MemoryKeyStore()
        return RedisKeyStore(settings.redis_url, namespace=settings.get_cache_key_prefix())
    return MemoryKeyStore()


class ServiceContainer:
    """Holds every long-lived service of one application instance."""

    def __init__(
        self,
        settings: Settings,
        key_store: Optional[KeyStore] = None,
        db: Optional[DatabaseManager] = None,
    ):
        self.settings = settings
        self.key_store = key_store
        self.db = db

        if db is not None:
            users = UserDatabaseRepository(db)
            jobs = JobDatabaseRepository(db)
            applications = ApplicationDatabaseRepository(db)
            resumes = ResumeDatabaseRepository(db)
        else:
            users = InMemoryUserRepository()
            jobs = InMemoryJobRepository()
            applications = InMemoryApplicationRepository()
            resumes = InMemoryResumeRepository()

        self.users = users
        self.jobs = jobs
        self.applications = applications
        self.resumes = resumes

        ttls = settings.get_cache_ttls()
        self.response_cache = ResponseCache(
            key_store,
            default_ttl=ttls.pop("default"),
            ttls=ttls,
            enabled=settings.enable_response_cache,
        )
        self.notifications = NotificationDispatcher(LoggingNotifier())
        self.token_verifier = TokenVerifier(
            settings.jwt_secret.get_secret_value(),
            algorithms=(settings.jwt_algorithm,),
        )

        self.user_service = UserService(users)
        self.job_coordinator = JobMutationCoordinator(jobs, applications, self.response_cache)
        self.lifecycle = ApplicationLifecycle(
            applications,
            jobs,
            resumes,
            self.notifications,
            allow_decision_reversal=settings.allow_decision_reversal,
        )
        self.resume_service = ResumeService(
            resumes,
            LocalResumeStorage(settings.upload_dir, settings.max_upload_size),
            applications,
        )
        self.system_service = SystemService(
            self.response_cache, users, jobs, applications, resumes, db=db
        )

    @classmethod
    def build(cls, settings: Settings) -> "ServiceContainer":
        """Pick backends from settings: asyncpg when DATABASE_URL is set, else in-memory."""
        db = None
        if settings.database_url:
            db = DatabaseManager(
                settings.database_url,
                application_name=settings.app_name,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                command_timeout=settings.db_command_timeout,
            )
        return cls(settings, key_store=build_key_store(settings), db=db)

    async def startup(self) -> None:
        if self.db is not None:
            await self.db.create_pool()
            await ensure_schema(self.db)
        if self.key_store is not None:
            await self.key_store.connect()

    async def shutdown(self) -> None:
        await self.notifications.drain()
        if self.key_store is not None:
            await self.key_store.close()
        if self.db is not None:
            await self.db.close_pool()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    container: ServiceContainer = app.state.container
    await container.startup()
    logger.info(f"{container.settings.app_name} started ({container.settings.environment})")

    yield

    await container.shutdown()
    logger.info(f"{container.settings.app_name} stopped")


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Create the job portal API.

    Args:
        settings: Defaults to the environment settings
        container: Prebuilt services, mainly for tests

    Returns:
        Configured FastAPI application
    """
    settings = settings or (container.settings if container else get_settings())
    container = container or ServiceContainer.build(settings)

    app = FastAPI(
        title="Job Portal API",
        version=__version__,
        description="Jobs, applications and resumes with cached job reads",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(
        app,
        is_production=settings.is_production,
        include_stack=settings.is_development,
    )

    from .features.applications.routers import router as applications_router
    from .features.jobs.routers import router as jobs_router
    from .features.resumes.routers import router as resumes_router
    from .features.system.routers import router as system_router
    from .features.users.routers import router as users_router

    prefix = settings.api_prefix.rstrip("/")
    app.include_router(jobs_router, prefix=f"{prefix}/jobs", tags=["Jobs"])
    app.include_router(applications_router, prefix=f"{prefix}/applications", tags=["Applications"])
    app.include_router(resumes_router, prefix=f"{prefix}/resumes", tags=["Resumes"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["Users"])
    app.include_router(system_router, prefix=f"{prefix}/utility")

    logger.info("Created Job Portal API")
    return app
