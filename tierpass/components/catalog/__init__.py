"""
Catalog component - content records, creation and deactivation.
"""

from .component import (
    check_content_id,
    run_create,
    run_deactivate,
    run_get,
    run_list,
    validate_content_fields,
)
from .models import (
    ContentDetailsOutput,
    ContentListOutput,
    ContentOperationOutput,
    CreateContentInput,
    DeactivateContentInput,
    GetContentInput,
    ListContentInput,
)
from .ports import ContentRepoPort, PlatformStateRepoPort, TimePort

__all__ = [
    # Functions
    "check_content_id",
    "run_create",
    "run_deactivate",
    "run_get",
    "run_list",
    "validate_content_fields",
    # Models
    "ContentDetailsOutput",
    "ContentListOutput",
    "ContentOperationOutput",
    "CreateContentInput",
    "DeactivateContentInput",
    "GetContentInput",
    "ListContentInput",
    # Ports
    "ContentRepoPort",
    "PlatformStateRepoPort",
    "TimePort",
]
