from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from shoptrack.api.error import raise_for_error
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.auth import (
    GetCurrentIdentityUseCase,
    IdentityResponse,
    SessionResponse,
    SignInUseCase,
    SignUpCommand,
    SignUpResponse,
    SignUpUseCase,
    UpdateMetadataUseCase,
)
from shoptrack.app.use_cases.tenants import (
    SetupTenantCommand,
    SetupTenantResponse,
    SetupTenantUseCase,
)
from shoptrack.depends import get_caller, get_current_identity_id, get_unit_of_work
from shoptrack.domain.caller import CallerContext

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignUpRequest(BaseModel):
    """
    Sign-up HTTP request payload

    Validates incoming HTTP request before converting to SignUpCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    full_name: Optional[str] = Field(None, max_length=255, description="Display name")


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignUpResponse)
async def sign_up(request: SignUpRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Self-service Sign-up

    Creates an identity and an unassigned tenant_user profile, and returns
    a session so tenant setup can follow.

    Raises:
        - 409 Conflict: EMAIL_ALREADY_EXISTS
        - 422 Unprocessable Entity: Invalid input
    """
    command = SignUpCommand(
        email=request.email, password=request.password, full_name=request.full_name
    )

    use_case = SignUpUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class SignInRequest(BaseModel):
    """Sign-in HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/signin", status_code=status.HTTP_200_OK, response_model=SessionResponse)
async def sign_in(request: SignInRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Sign In

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 403 Forbidden: USER_INACTIVE
    """
    use_case = SignInUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/user", status_code=status.HTTP_200_OK, response_model=IdentityResponse)
async def get_current_user(
    identity_id: UUID = Depends(get_current_identity_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Identity

    Raises:
        - 401 Unauthorized: NOT_AUTHENTICATED
    """
    use_case = GetCurrentIdentityUseCase(uow)
    result = await use_case.execute(identity_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateMetadataRequest(BaseModel):
    """Keys to merge into the identity metadata"""

    data: Dict[str, Any] = Field(..., description="Metadata keys to set")


@router.patch("/user/metadata", status_code=status.HTTP_200_OK, response_model=IdentityResponse)
async def update_metadata(
    request: UpdateMetadataRequest,
    identity_id: UUID = Depends(get_current_identity_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Identity Metadata

    Raises:
        - 401 Unauthorized: NOT_AUTHENTICATED
    """
    use_case = UpdateMetadataUseCase(uow)
    result = await use_case.execute(identity_id, request.data)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/context", status_code=status.HTTP_200_OK, response_model=CallerContext)
async def get_context(caller: CallerContext = Depends(get_caller)):
    """
    Resolved Caller Context

    Role, tenant and status as read from the caller's profile for this request.

    Raises:
        - 401 Unauthorized: NOT_AUTHENTICATED
        - 403 Forbidden: PROFILE_MISSING, USER_INACTIVE
    """
    return caller


class SetupTenantRequest(BaseModel):
    """Self-service tenant setup payload"""

    name: str = Field(..., min_length=1, max_length=255, description="Business name")
    address: Optional[str] = Field(None, description="Business address")
    contact_info: Optional[str] = Field(None, description="Contact details")


@router.post(
    "/setup-tenant", status_code=status.HTTP_201_CREATED, response_model=SetupTenantResponse
)
async def setup_tenant(
    request: SetupTenantRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Self-service Tenant Setup

    Creates a tenant and assigns the caller to it.

    Raises:
        - 401 Unauthorized: NOT_AUTHENTICATED
        - 409 Conflict: TENANT_ALREADY_ASSIGNED
    """
    command = SetupTenantCommand(
        name=request.name, address=request.address, contact_info=request.contact_info
    )

    use_case = SetupTenantUseCase(uow)
    result = await use_case.execute(caller, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
