"""
Password Reset Use Cases
"""

from .complete_password_reset_use_case import CompletePasswordResetUseCase
from .dtos import (
    CompletePasswordResetResponse,
    RequestPasswordResetResponse,
    VerifyResetTokenResponse,
)
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase

__all__ = [
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "CompletePasswordResetUseCase",
    "RequestPasswordResetResponse",
    "VerifyResetTokenResponse",
    "CompletePasswordResetResponse",
]
