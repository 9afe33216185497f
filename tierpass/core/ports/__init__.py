# tierpass - Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from tierpass.core.ports.time import TimePort
from tierpass.core.ports.value_transfer import (
    CUSTODY_ACCOUNT,
    InsufficientCustodyError,
    ValueTransferPort,
)

__all__ = [
    # Time
    "TimePort",
    # Value transfer
    "CUSTODY_ACCOUNT",
    "InsufficientCustodyError",
    "ValueTransferPort",
]
