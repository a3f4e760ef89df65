"""
User Management Use Cases

Caller resolution and all user-related business logic.
"""

from .create_user_use_case import CreateUserUseCase
from .delete_user_use_case import DeleteUserUseCase
from .dtos import (
    CreateUserCommand,
    DeleteUserResponse,
    ListUsersQuery,
    ResetPasswordResponse,
    TenantSummary,
    UpdateUserCommand,
    UserResponse,
    UserStatsResponse,
)
from .get_user_use_case import GetUserUseCase
from .list_users_use_case import ListUsersUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .resolve_caller_use_case import ResolveCallerUseCase
from .update_user_use_case import UpdateUserUseCase
from .user_stats_use_case import UserStatsUseCase

__all__ = [
    "ResolveCallerUseCase",
    "ListUsersUseCase",
    "GetUserUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "UserStatsUseCase",
    "ResetPasswordUseCase",
    "CreateUserCommand",
    "UpdateUserCommand",
    "ListUsersQuery",
    "UserResponse",
    "TenantSummary",
    "UserStatsResponse",
    "DeleteUserResponse",
    "ResetPasswordResponse",
]
