"""
Authentication Use Cases

Identity and session business logic.
"""

from .dtos import IdentityResponse, SessionResponse, SignUpCommand, SignUpResponse
from .get_current_identity_use_case import GetCurrentIdentityUseCase
from .sign_in_use_case import SignInUseCase
from .sign_up_use_case import SignUpUseCase
from .update_metadata_use_case import UpdateMetadataUseCase

__all__ = [
    "SignUpUseCase",
    "SignInUseCase",
    "GetCurrentIdentityUseCase",
    "UpdateMetadataUseCase",
    "SignUpCommand",
    "SignUpResponse",
    "SessionResponse",
    "IdentityResponse",
]
