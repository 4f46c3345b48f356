from typing import Optional
from fastapi import Depends, Header, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.storage_service import ImgBBStorageService
from src.app.services.notification_service import NotificationService
from src.app.services.pdf_service import PdfService
from src.app.services.storage_service import StorageService
from src.domain.roles import Actor, UserRole

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_config():
    return ApplicationConfig


def get_pdf_service() -> PdfService:
    return ReportLabPdfService()


def get_storage_service() -> StorageService:
    return ImgBBStorageService(
        api_url=ApplicationConfig.STORAGE_API_URL,
        api_key=ApplicationConfig.STORAGE_API_KEY,
    )


def get_delivery_service() -> NotificationService:
    return create_notification_service(ApplicationConfig.ALERT_WEBHOOK_URL)


async def get_current_actor(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Actor:
    """Caller identity forwarded by the upstream identity provider"""
    if not x_user_id or not x_user_role:
        raise ClientError(
            Error(code="UNAUTHENTICATED", message="X-User-Id and X-User-Role headers are required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        role = UserRole(x_user_role.strip().lower())
    except ValueError:
        raise ClientError(
            Error(code="INVALID_ROLE", message=f"Unknown role: {x_user_role}"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    return Actor(user_id=x_user_id.strip(), role=role)


STAFF_ROLES = (
    UserRole.ADMIN,
    UserRole.DOCTOR,
    UserRole.NURSE,
    UserRole.RECEPTIONIST,
    UserRole.LAB_TECHNICIAN,
)


def require_roles(*roles: UserRole):
    """Dependency that only lets the given roles through"""

    async def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            raise ClientError(
                Error(
                    code="PERMISSION_DENIED",
                    message=f"Role {actor.role.value} is not allowed to perform this action",
                ),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return actor

    return dependency
