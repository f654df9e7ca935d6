"""Class based positions for a single rally."""

import logging
from collections.abc import Iterable

from src.models.participant import ManualParticipant, RegisteredUser
from src.models.result import (
    ClassStatistics,
    RallyClassResult,
    RallyEntry,
    RallyResults,
    RawResult,
)
from src.resolver.participants import resolve_participants

logger = logging.getLogger(__name__)

UNKNOWN_CLASS = "Unknown Class"


def _group_by_class(entries: Iterable[RallyEntry]) -> dict[str, list[RallyEntry]]:
    """Group entries by class name, keeping input order within each class."""
    by_class: dict[str, list[RallyEntry]] = {}
    for entry in entries:
        by_class.setdefault(entry.class_name or UNKNOWN_CLASS, []).append(entry)
    return by_class


def calculate_class_positions(
    entries: Iterable[RallyEntry],
) -> list[RallyClassResult]:
    """
    Rank a rally's entries within each class.

    Within a class, entries that scored are ranked by points (descending),
    followed by participants without points in name order. Non-participants
    get no position and zero points. Overall positions are assigned across
    all classes to participants only.

    Args:
        entries: Rally entries from the results screen

    Returns:
        Participants ordered by overall position, then non-participants
    """
    ranked: list[RallyClassResult] = []
    absent: list[RallyClassResult] = []

    for class_name, class_entries in _group_by_class(entries).items():
        participated = [e for e in class_entries if e.participated]

        with_points = sorted(
            (e for e in participated if e.total_points),
            key=lambda e: (-(e.total_points or 0), e.player_name),
        )
        without_points = sorted(
            (e for e in participated if not e.total_points),
            key=lambda e: e.player_name,
        )

        for i, entry in enumerate(with_points + without_points):
            ranked.append(
                RallyClassResult(
                    participant_id=entry.participant_id,
                    player_name=entry.player_name,
                    class_name=class_name,
                    total_points=entry.total_points or 0,
                    participated=True,
                    class_position=i + 1,
                )
            )

        for entry in class_entries:
            if entry.participated:
                continue
            absent.append(
                RallyClassResult(
                    participant_id=entry.participant_id,
                    player_name=entry.player_name,
                    class_name=class_name,
                    total_points=0,
                    participated=False,
                )
            )

    ranked.sort(key=lambda r: (-r.total_points, r.player_name))
    for i, result in enumerate(ranked):
        result.overall_position = i + 1

    logger.debug(f"Ranked {len(ranked)} participants, {len(absent)} absent")

    return ranked + absent


def get_class_statistics(
    entries: Iterable[RallyEntry],
) -> dict[str, ClassStatistics]:
    """
    Summarise points per class.

    Args:
        entries: Rally entries

    Returns:
        Dict mapping class name to its statistics
    """
    statistics: dict[str, ClassStatistics] = {}

    for class_name, class_entries in _group_by_class(entries).items():
        points = [
            e.total_points
            for e in class_entries
            if e.participated and e.total_points is not None
        ]
        statistics[class_name] = ClassStatistics(
            class_name=class_name,
            count=len(class_entries),
            with_results=len(points),
            average_points=sum(points) / len(points) if points else 0.0,
            highest_points=max(points, default=0),
            lowest_points=min(points, default=0),
        )

    return statistics


def get_participant_status(participated: bool, total_points: int | None) -> str:
    """Status label for an entry on the results screen."""
    if not participated:
        return "absent"
    if total_points is not None:
        return "entered"
    return "pending"


def best_result(rows: Iterable[RawResult]) -> RawResult | None:
    """Pick the highest scoring row, the first one on ties."""
    best: RawResult | None = None
    for row in rows:
        if best is None or row.overall_points > best.overall_points:
            best = row
    return best


def rank_rally(
    rally_id: str,
    raw_results: Iterable[RawResult],
    users: Iterable[RegisteredUser] = (),
    manual_participants: Iterable[ManualParticipant] = (),
) -> RallyResults:
    """
    Rank the stored results of one rally by class.

    A participant with several rows in one class is ranked once, on the
    best of those rows.

    Args:
        rally_id: Rally to rank
        raw_results: Result rows, rows from other rallies are ignored
        users: Registered users for display name lookup
        manual_participants: Manual participant records for display names

    Returns:
        RallyResults with the ranking (see calculate_class_positions) and
        the resolver's warnings
    """
    rows = [r for r in raw_results if r.rally_id == rally_id]
    resolution = resolve_participants(rows, users, manual_participants)
    participants = {p.key: p for p in resolution.participants}

    # (participant key, class) -> rows, in first-seen order
    grouped: dict[tuple[str, str], list[RawResult]] = {}
    for row, key in zip(rows, resolution.row_keys, strict=True):
        if key is not None:
            grouped.setdefault((key, row.class_name), []).append(row)

    duplicates = sum(len(group) - 1 for group in grouped.values())
    if duplicates:
        logger.warning(
            f"Rally {rally_id}: {duplicates} duplicate results ignored, "
            f"best row kept per participant and class"
        )

    entries = []
    for (key, class_name), group in grouped.items():
        best = best_result(group)
        entries.append(
            RallyEntry(
                participant_id=key,
                player_name=participants[key].display_name,
                class_name=class_name,
                total_points=best.overall_points,
            )
        )

    return RallyResults(
        rally_id=rally_id,
        results=calculate_class_positions(entries),
        warnings=resolution.warnings,
    )
