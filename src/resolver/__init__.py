"""Participant identity resolution."""

from src.resolver.participants import (
    ResolutionResult,
    resolve_participant,
    resolve_participants,
)

__all__ = [
    "ResolutionResult",
    "resolve_participant",
    "resolve_participants",
]
