"""Rally, championship and team standings calculation."""

from src.processor.championship import aggregate_championship
from src.processor.output import (
    championship_payload,
    generate_championship_output,
    generate_team_rally_output,
    rally_payload,
    team_championship_payload,
    team_rally_payload,
)
from src.processor.rally_results import (
    calculate_class_positions,
    get_class_statistics,
    rank_rally,
)
from src.processor.standings import StandingsBuilder
from src.processor.team_results import (
    aggregate_team_championship,
    aggregate_team_rally,
    mark_contributors,
)

__all__ = [
    "StandingsBuilder",
    "aggregate_championship",
    "aggregate_team_championship",
    "aggregate_team_rally",
    "calculate_class_positions",
    "championship_payload",
    "generate_championship_output",
    "generate_team_rally_output",
    "get_class_statistics",
    "mark_contributors",
    "rally_payload",
    "rank_rally",
    "team_championship_payload",
    "team_rally_payload",
]
