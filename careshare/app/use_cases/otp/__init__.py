"""
OTP Verification Use Cases
"""

from .backfill_otp_flags_use_case import BackfillOTPFlagsUseCase
from .check_otp_status_use_case import CheckOTPStatusUseCase
from .dtos import (
    BackfillOTPFlagsResponse,
    IssueOTPResponse,
    OTPStatusResponse,
    VerifyOTPResponse,
)
from .generate_otp_use_case import GenerateOTPUseCase
from .resend_otp_use_case import ResendOTPUseCase
from .verify_otp_use_case import VerifyOTPUseCase

__all__ = [
    "GenerateOTPUseCase",
    "ResendOTPUseCase",
    "VerifyOTPUseCase",
    "CheckOTPStatusUseCase",
    "BackfillOTPFlagsUseCase",
    "IssueOTPResponse",
    "VerifyOTPResponse",
    "OTPStatusResponse",
    "BackfillOTPFlagsResponse",
]
