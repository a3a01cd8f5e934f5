"""
Profile Use Cases
"""

from .create_profile_use_case import CreateProfileUseCase
from .dtos import (
    CreateProfileCommand,
    CreateProfileResponse,
    LookupProfileResponse,
    ProfileSummary,
    SendWelcomeEmailResponse,
)
from .lookup_profile_use_case import LookupProfileUseCase
from .send_welcome_email_use_case import SendWelcomeEmailUseCase

__all__ = [
    "CreateProfileUseCase",
    "LookupProfileUseCase",
    "SendWelcomeEmailUseCase",
    "CreateProfileCommand",
    "CreateProfileResponse",
    "LookupProfileResponse",
    "ProfileSummary",
    "SendWelcomeEmailResponse",
]
