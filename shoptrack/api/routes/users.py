from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from shoptrack.api.error import raise_for_error
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.tenants import AssignmentCheck, CanAssignToTenantUseCase
from shoptrack.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserResponse,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersQuery,
    ListUsersUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
    UserResponse,
    UserStatsResponse,
    UserStatsUseCase,
)
from shoptrack.depends import get_caller, get_unit_of_work
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserRole, UserStatus

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[UserResponse])
async def list_users(
    role: Optional[UserRole] = Query(None),
    status_filter: Optional[UserStatus] = Query(None, alias="status"),
    tenant_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None, description="Matches email or full name"),
    exclude_self: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Users

    Returns the profiles visible to the caller, newest first, each with
    its tenant inline.
    """
    query = ListUsersQuery(
        role=role,
        status=status_filter,
        tenant_id=tenant_id,
        search=search,
        exclude_self=exclude_self,
        limit=limit,
        offset=offset,
    )

    use_case = ListUsersUseCase(uow)
    result = await use_case.execute(caller, query)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=UserStatsResponse)
async def user_stats(
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """User counts by role and status, plus logins in the last 30 days"""
    use_case = UserStatsUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def get_user(
    user_id: UUID,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get User

    Raises:
        - 404 Not Found: NOT_FOUND (absent or not visible)
    """
    use_case = GetUserUseCase(uow)
    result = await use_case.execute(caller, user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{user_id}/can-assign/{tenant_id}",
    status_code=status.HTTP_200_OK,
    response_model=AssignmentCheck,
)
async def can_assign_to_tenant(
    user_id: UUID,
    tenant_id: UUID,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Can Assign User To Tenant

    Raises:
        - 404 Not Found: NOT_FOUND / TENANT_NOT_FOUND
    """
    use_case = CanAssignToTenantUseCase(uow)
    result = await use_case.execute(caller, user_id, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class CreateUserRequest(BaseModel):
    """Create user HTTP request payload"""

    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = Field(None, max_length=255)
    role: UserRole = UserRole.tenant_user
    tenant_id: Optional[UUID] = None
    status: UserStatus = UserStatus.active


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    request: CreateUserRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create User

    Tenant admins always create into their own tenant.

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 409 Conflict: EMAIL_ALREADY_EXISTS / TENANT_AT_CAPACITY
        - 404 Not Found: TENANT_NOT_FOUND
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    command = CreateUserCommand(**request.model_dump())

    use_case = CreateUserUseCase(uow)
    result = await use_case.execute(caller, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateUserRequest(BaseModel):
    """Update user HTTP request payload; omitted fields are left unchanged"""

    full_name: Optional[str] = Field(None, max_length=255)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    tenant_id: Optional[UUID] = None
    permissions: Optional[Dict[str, Any]] = None


@router.patch("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update User

    Raises:
        - 403 Forbidden: SELF_PRIVILEGE_ESCALATION / INSUFFICIENT_ROLE
        - 404 Not Found: NOT_FOUND / TENANT_NOT_FOUND
        - 409 Conflict: TENANT_AT_CAPACITY
    """
    command = UpdateUserCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateUserUseCase(uow)
    result = await use_case.execute(caller, user_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse)
async def delete_user(
    user_id: UUID,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete User

    Removes both the profile and the sign-in identity.

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: NOT_FOUND
    """
    use_case = DeleteUserUseCase(uow)
    result = await use_case.execute(caller, user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Administrative password reset payload"""

    new_password: str = Field(..., min_length=8)


@router.post(
    "/{user_id}/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password(
    user_id: UUID,
    request: ResetPasswordRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reset User Password

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE (super_admin only)
        - 404 Not Found: NOT_FOUND
    """
    use_case = ResetPasswordUseCase(uow)
    result = await use_case.execute(caller, user_id, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
