"""
Cross-Organization Access Grant Use Cases
"""

from .approve_access_use_case import ApproveAccessUseCase
from .check_shared_access_use_case import CheckSharedAccessUseCase
from .deny_access_use_case import DenyAccessUseCase
from .dtos import (
    AccessGrantResponse,
    AccessGrantView,
    ApproveAccessCommand,
    IssueShareTokenResponse,
    ListAccessGrantsResponse,
    RequestAccessResponse,
    SharedAccessResponse,
)
from .issue_share_token_use_case import IssueShareTokenUseCase
from .list_patient_grants_use_case import ListPatientGrantsUseCase
from .request_access_use_case import RequestAccessUseCase
from .revoke_access_use_case import RevokeAccessUseCase

__all__ = [
    "IssueShareTokenUseCase",
    "RequestAccessUseCase",
    "ApproveAccessUseCase",
    "DenyAccessUseCase",
    "RevokeAccessUseCase",
    "ListPatientGrantsUseCase",
    "CheckSharedAccessUseCase",
    "ApproveAccessCommand",
    "AccessGrantResponse",
    "AccessGrantView",
    "IssueShareTokenResponse",
    "ListAccessGrantsResponse",
    "RequestAccessResponse",
    "SharedAccessResponse",
]
