"""Championship standings calculation."""

import logging
from collections.abc import Iterable

from src.models.participant import ManualParticipant, Participant, RegisteredUser
from src.models.result import ChampionshipRally, RallyScore, RawResult
from src.models.standings import (
    ChampionshipStandings,
    ClassStanding,
    ClassStandings,
)
from src.processor.rally_results import best_result
from src.resolver.participants import resolve_participants

logger = logging.getLogger(__name__)

NO_RALLIES_WARNING = "No rallies found in championship"


def aggregate_championship(
    championship_id: str,
    rallies: Iterable[ChampionshipRally],
    raw_results: Iterable[RawResult],
    users: Iterable[RegisteredUser] = (),
    manual_participants: Iterable[ManualParticipant] = (),
    championship_name: str | None = None,
) -> ChampionshipStandings:
    """
    Calculate championship standings from all rally results.

    Every standing has exactly one score per championship rally, in round
    order; missed rounds are recorded with zero points. A participant who
    raced in two classes gets an independent standing in each.

    Args:
        championship_id: Championship ID
        rallies: The championship's rallies with their round numbers
        raw_results: Result rows, rows from other rallies are ignored
        users: Registered users for display name lookup
        manual_participants: Manual participant records for display names
        championship_name: Optional name carried into the output

    Returns:
        ChampionshipStandings grouped by class, each class ranked
    """
    sorted_rallies = sorted(rallies, key=lambda r: r.round_number)

    if not sorted_rallies:
        logger.warning(f"No rallies found for championship: {championship_id}")
        return ChampionshipStandings(
            championship_id=championship_id,
            championship_name=championship_name,
            warnings=[NO_RALLIES_WARNING],
        )

    rally_ids = {r.rally_id for r in sorted_rallies}
    results = [r for r in raw_results if r.rally_id in rally_ids]

    resolution = resolve_participants(results, users, manual_participants)

    # (participant key, class) -> rally ID -> rows
    grouped: dict[tuple[str, str], dict[str, list[RawResult]]] = {}
    for row, key in zip(results, resolution.row_keys, strict=True):
        if key is None:
            continue
        rally_rows = grouped.setdefault((key, row.class_name), {})
        rally_rows.setdefault(row.rally_id, []).append(row)

    participants = {p.key: p for p in resolution.participants}
    standings_by_class: dict[str, list[ClassStanding]] = {}
    for (key, class_name), rally_rows in grouped.items():
        standing = _build_class_standing(
            participants[key], class_name, sorted_rallies, rally_rows
        )
        standings_by_class.setdefault(class_name, []).append(standing)

    classes = [
        ClassStandings(
            class_name=class_name,
            standings=_calculate_championship_positions(standings_by_class[class_name]),
        )
        for class_name in sorted(standings_by_class)
    ]

    logger.info(
        f"Championship {championship_id}: {len(grouped)} standings across "
        f"{len(classes)} classes and {len(sorted_rallies)} rounds"
    )

    return ChampionshipStandings(
        championship_id=championship_id,
        championship_name=championship_name,
        rallies=sorted_rallies,
        classes=classes,
        linked_participants=resolution.linked_participants,
        unlinked_participants=resolution.unlinked_participants,
        warnings=resolution.warnings,
    )


def _build_class_standing(
    participant: Participant,
    class_name: str,
    rallies: list[ChampionshipRally],
    rally_rows: dict[str, list[RawResult]],
) -> ClassStanding:
    """
    Build one participant's standing in one class.

    Args:
        participant: Resolved participant
        class_name: Class the standing is for
        rallies: Championship rallies in round order
        rally_rows: Rows for this participant and class, keyed by rally ID

    Returns:
        Unranked ClassStanding with a score for every round
    """
    rally_scores: list[RallyScore] = []

    for rally in rallies:
        best = best_result(rally_rows.get(rally.rally_id, []))

        if best is None:
            rally_scores.append(
                RallyScore(
                    rally_id=rally.rally_id,
                    round_number=rally.round_number,
                    rally_name=rally.rally_name,
                    participated=False,
                )
            )
            continue

        rally_scores.append(
            RallyScore(
                rally_id=rally.rally_id,
                round_number=rally.round_number,
                rally_name=rally.rally_name,
                rally_points=best.total_points,
                extra_points=best.extra_points,
                points=best.overall_points,
                participated=True,
                class_position=best.class_position,
            )
        )

    participated = [s for s in rally_scores if s.participated]

    return ClassStanding(
        participant=participant,
        class_name=class_name,
        rally_scores=rally_scores,
        total_points=sum(s.points for s in participated),
        total_rally_points=sum(s.rally_points for s in participated),
        total_extra_points=sum(s.extra_points for s in participated),
        rounds_participated=len(participated),
    )


def _standing_sort_key(standing: ClassStanding) -> tuple[int, int, str, str]:
    """Points, then rounds raced (both descending), then name."""
    return (
        -standing.total_points,
        -standing.rounds_participated,
        standing.participant_name,
        standing.participant_key,
    )


def _calculate_championship_positions(
    standings: list[ClassStanding],
) -> list[ClassStanding]:
    """
    Sort one class's standings and assign championship positions.

    Args:
        standings: Standings for a single class

    Returns:
        Sorted list with positions 1..n
    """
    sorted_standings = sorted(standings, key=_standing_sort_key)

    for i, standing in enumerate(sorted_standings):
        standing.championship_position = i + 1

    return sorted_standings
