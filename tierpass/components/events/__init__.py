"""
Events component - notification log.
"""

from .component import emit, run_list
from .models import EventListOutput, ListEventsInput
from .ports import EventRepoPort

__all__ = [
    # Entry points
    "emit",
    "run_list",
    # Models
    "EventListOutput",
    "ListEventsInput",
    # Ports
    "EventRepoPort",
]
