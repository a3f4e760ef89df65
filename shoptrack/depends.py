from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from shoptrack.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from shoptrack.api.error import ClientError, raise_for_error
from shoptrack.api.utils.jwt import identity_id_from_token
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.users import ResolveCallerUseCase
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def create_tables():
    """Create missing tables (development databases)"""
    import shoptrack.domain.entities  # noqa: F401  registers the tables

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_identity_id(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> UUID:
    """
    Dependency to extract and verify the JWT from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Identity id carried by the token

    Raises:
        ClientError: 401 NOT_AUTHENTICATED if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error("NOT_AUTHENTICATED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    identity_id = identity_id_from_token(credentials.credentials)
    if identity_id is None:
        raise ClientError(
            Error("NOT_AUTHENTICATED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return identity_id


async def get_caller(
    identity_id: UUID = Depends(get_current_identity_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> CallerContext:
    """
    Dependency resolving the caller once per request.

    Role and tenant are read from the caller's profile row, never from the token.
    """
    result = await ResolveCallerUseCase(uow).execute(identity_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
