"""
outcome.py
Result of a successful create-or-update call.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UpdateResult:
    """created is False when an existing row was updated; entity is the mapped dict."""
    created: bool
    entity: dict
