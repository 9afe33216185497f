"""
Registry component - administrator and creator allow-list.
"""

from .component import (
    require_administrator,
    require_approved_creator,
    run_check_creator,
    run_list_creators,
    run_set_creator_approval,
)
from .models import (
    CheckCreatorInput,
    CreatorListOutput,
    CreatorStatusOutput,
    RegistryOutput,
    SetCreatorApprovalInput,
)
from .ports import CreatorApprovalRepoPort, PlatformStateRepoPort, TimePort

__all__ = [
    # Guards
    "require_administrator",
    "require_approved_creator",
    # Entry points
    "run_check_creator",
    "run_list_creators",
    "run_set_creator_approval",
    # Models
    "CheckCreatorInput",
    "CreatorListOutput",
    "CreatorStatusOutput",
    "RegistryOutput",
    "SetCreatorApprovalInput",
    # Ports
    "CreatorApprovalRepoPort",
    "PlatformStateRepoPort",
    "TimePort",
]
