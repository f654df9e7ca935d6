"""Resolve raw result rows into canonical participants."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from src.models.participant import (
    UNKNOWN_PLAYER,
    ManualLinkedParticipant,
    ManualParticipant,
    ManualUnlinkedParticipant,
    Participant,
    RegisteredParticipant,
    RegisteredUser,
    UserDirectory,
)
from src.models.result import RawResult

logger = logging.getLogger(__name__)


class ResolutionResult(BaseModel):
    """Outcome of a single resolution pass."""

    participants: list[Participant] = Field(
        default_factory=list,
        description="Distinct participants in first-seen order",
    )
    row_keys: list[str | None] = Field(
        default_factory=list,
        description="Participant key per input row, None for excluded rows",
    )
    linked_rows: int = Field(default=0, ge=0)
    unlinked_rows: int = Field(default=0, ge=0)
    unlinked_names: list[str] = Field(default_factory=list)
    malformed_rows: list[int] = Field(
        default_factory=list,
        description="Indices of rows without any usable identity",
    )
    warnings: list[str] = Field(default_factory=list)

    def get(self, key: str) -> Participant | None:
        """Find a resolved participant by key."""
        for participant in self.participants:
            if participant.key == key:
                return participant
        return None

    @property
    def linked_participants(self) -> int:
        """Number of distinct participants with a stable ID."""
        return sum(1 for p in self.participants if p.is_linked)

    @property
    def unlinked_participants(self) -> int:
        """Number of distinct participants matched by name and class only."""
        return sum(1 for p in self.participants if not p.is_linked)


def resolve_participant(
    row: RawResult,
    directory: UserDirectory,
) -> Participant | None:
    """
    Resolve the identity of a single result row.

    Priority order: registered user ID, then manual participant ID, then
    exact participant name and class.

    Args:
        row: Raw result row
        directory: Registered user and manual participant lookup

    Returns:
        The resolved participant, or None if the row has no usable identity
    """
    free_text_name = (row.participant_name or "").strip()

    if row.user_id:
        user = directory.get_user(row.user_id)
        display_name = (
            (user.display_name if user else None) or free_text_name or UNKNOWN_PLAYER
        )
        return RegisteredParticipant(user_id=row.user_id, display_name=display_name)

    if row.manual_participant_id:
        manual = directory.get_manual_participant(row.manual_participant_id)
        display_name = (
            (manual.display_name if manual else None)
            or free_text_name
            or UNKNOWN_PLAYER
        )
        return ManualLinkedParticipant(
            manual_participant_id=row.manual_participant_id,
            display_name=display_name,
        )

    if not free_text_name:
        return None

    # Key on the name exactly as entered
    return ManualUnlinkedParticipant(
        participant_name=row.participant_name,
        class_name=row.class_name,
    )


def resolve_participants(
    raw_results: Iterable[RawResult],
    users: Iterable[RegisteredUser] = (),
    manual_participants: Iterable[ManualParticipant] = (),
) -> ResolutionResult:
    """
    Resolve raw result rows into distinct participants.

    Rows sharing a user ID, a manual participant ID, or (with neither) the
    same name and class resolve to the same participant. Near-duplicate names
    are not merged; each distinct unlinked name is reported as a warning so
    the data can be linked by hand.

    Args:
        raw_results: Raw result rows
        users: Registered users for display name lookup
        manual_participants: Manual participant records for display names

    Returns:
        ResolutionResult with participants, per-row keys and warnings
    """
    directory = UserDirectory(
        users=list(users),
        manual_participants=list(manual_participants),
    )

    participants: dict[str, Participant] = {}
    row_keys: list[str | None] = []
    malformed_rows: list[int] = []
    unlinked_names: list[str] = []
    linked_rows = 0
    unlinked_rows = 0

    for index, row in enumerate(raw_results):
        participant = resolve_participant(row, directory)

        if participant is None:
            logger.warning(
                f"Skipping result without participant identity "
                f"(rally {row.rally_id}, class {row.class_name!r})"
            )
            malformed_rows.append(index)
            row_keys.append(None)
            continue

        if participant.is_linked:
            linked_rows += 1
        else:
            unlinked_rows += 1
            if participant.display_name not in unlinked_names:
                unlinked_names.append(participant.display_name)

        if participant.key not in participants:
            participants[participant.key] = participant
        row_keys.append(participant.key)

    warnings = _build_warnings(unlinked_names, unlinked_rows, malformed_rows)

    logger.info(
        f"Resolved {len(row_keys)} rows into {len(participants)} participants "
        f"({linked_rows} linked rows, {unlinked_rows} unlinked rows, "
        f"{len(malformed_rows)} skipped)"
    )

    return ResolutionResult(
        participants=list(participants.values()),
        row_keys=row_keys,
        linked_rows=linked_rows,
        unlinked_rows=unlinked_rows,
        unlinked_names=unlinked_names,
        malformed_rows=malformed_rows,
        warnings=warnings,
    )


def _build_warnings(
    unlinked_names: list[str],
    unlinked_rows: int,
    malformed_rows: list[int],
) -> list[str]:
    """Build operator-facing warnings for data needing manual linking."""
    warnings: list[str] = []

    if unlinked_names:
        warnings.append(
            f"{len(unlinked_names)} unlinked participants found "
            f"({unlinked_rows} results matched by name and class only)"
        )
        for name in unlinked_names:
            warnings.append(f"Unlinked participant: {name}")

    if malformed_rows:
        warnings.append(
            f"{len(malformed_rows)} results skipped: no user, manual participant "
            f"or participant name"
        )

    return warnings
