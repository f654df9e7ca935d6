"""JSON output for championship, rally and team results."""

import json
from pathlib import Path

from src.models.result import RallyResults
from src.models.standings import ChampionshipStandings, ClassStandings
from src.models.team import TeamChampionshipStandings, TeamRallyResult


def championship_payload(standings: ChampionshipStandings) -> dict:
    """
    Build the JSON payload for championship standings.

    Args:
        standings: Ranked championship standings

    Returns:
        Dictionary ready for json.dump
    """
    return {
        "championship_id": standings.championship_id,
        "championship_name": standings.championship_name,
        "total_rounds": standings.total_rounds,
        "linked_participants": standings.linked_participants,
        "unlinked_participants": standings.unlinked_participants,
        "warnings": standings.warnings,
        "rounds": [
            {
                "rally_id": r.rally_id,
                "round_number": r.round_number,
                "rally_name": r.rally_name,
            }
            for r in standings.rallies
        ],
        "classes": [_class_standings_to_dict(c) for c in standings.classes],
    }


def _class_standings_to_dict(class_standings: ClassStandings) -> dict:
    """Convert one class's standings to a dictionary for JSON output."""
    return {
        "class_name": class_standings.class_name,
        "standings": [
            {
                "position": s.championship_position,
                "participant_key": s.participant_key,
                "participant_name": s.participant_name,
                "participant_type": s.participant.participant_type,
                "is_linked": s.is_linked,
                "total_points": s.total_points,
                "total_rally_points": s.total_rally_points,
                "total_extra_points": s.total_extra_points,
                "rounds_participated": s.rounds_participated,
                "rounds": {
                    str(score.round_number): score.points_display
                    for score in s.rally_scores
                },
            }
            for s in class_standings.standings
        ],
    }


def rally_payload(rally: RallyResults) -> dict:
    """Build the JSON payload for a rally's class results."""
    classes: dict[str, list[dict]] = {}
    for result in rally.results:
        classes.setdefault(result.class_name, []).append(
            result.model_dump(mode="json", exclude={"class_name"})
        )

    return {
        "rally_id": rally.rally_id,
        "total_participants": rally.total_participants,
        "warnings": rally.warnings,
        "classes": classes,
    }


def team_rally_payload(rally_id: str, results: list[TeamRallyResult]) -> dict:
    """Build the JSON payload for a rally's team results."""
    return {
        "rally_id": rally_id,
        "teams": [
            {
                "team_id": r.team_id,
                "team_name": r.team_name,
                "class_id": r.class_id,
                "class_name": r.class_name,
                "team_position": r.team_position,
                "total_points": r.total_points,
                "contributor_points": r.contributor_points,
                "total_mismatch": r.total_mismatch,
                "member_count": r.member_count,
                "members": [
                    {
                        "user_id": m.participant.user_id,
                        "player_name": m.player_name,
                        "points": m.points,
                        "contributed": m.contributed,
                    }
                    for m in r.members
                ],
            }
            for r in results
        ],
    }


def team_championship_payload(standings: TeamChampionshipStandings) -> dict:
    """Build the JSON payload for team championship standings."""
    return standings.model_dump(mode="json")


def write_json(payload: dict, output_dir: str | Path, filename: str) -> Path:
    """
    Write a payload to a JSON file.

    Args:
        payload: JSON-serialisable dictionary
        output_dir: Output directory, created if missing
        filename: File name within the output directory

    Returns:
        Path to the written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    output_file = output_dir / filename
    with output_file.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=str)

    return output_file


def generate_championship_output(
    standings: ChampionshipStandings,
    output_dir: str | Path,
) -> Path:
    """Write championship standings to championship_<id>.json."""
    return write_json(
        championship_payload(standings),
        output_dir,
        f"championship_{standings.championship_id}.json",
    )


def generate_team_rally_output(
    rally_id: str,
    results: list[TeamRallyResult],
    output_dir: str | Path,
) -> Path:
    """Write team results to team_rally_<id>.json."""
    return write_json(
        team_rally_payload(rally_id, results),
        output_dir,
        f"team_rally_{rally_id}.json",
    )
