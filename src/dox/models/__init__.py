"""Pydantic data models for dox.

This package defines the data structures shared by the link subsystem:
- Deployment targets (Host)
- Extracted hyperlinks and their provenance (LinkRecord)
- Probe classifications and validation totals (ValidationResult, ValidationSummary)
"""

from .host import Host
from .links import LinkRecord, LinkStatus, ValidationResult, ValidationSummary

__all__ = [
    "Host",
    "LinkRecord",
    "LinkStatus",
    "ValidationResult",
    "ValidationSummary",
]
