"""Pytest fixtures for rally scoring tests."""

import pytest

from src.models import (
    ChampionshipRally,
    ManualParticipant,
    RawMemberResult,
    RawResult,
    RegisteredUser,
    TeamTotal,
)


@pytest.fixture
def sample_rallies() -> list[ChampionshipRally]:
    """Three championship rounds, deliberately out of order."""
    return [
        ChampionshipRally(rally_id="r3", round_number=3, rally_name="Rally Saaremaa"),
        ChampionshipRally(rally_id="r1", round_number=1, rally_name="Rally Tartu"),
        ChampionshipRally(rally_id="r2", round_number=2, rally_name="Rally Otepää"),
    ]


@pytest.fixture
def sample_users() -> list[RegisteredUser]:
    """Registered users with and without player names."""
    return [
        RegisteredUser(id="u1", player_name="Ott T", account_name="ott"),
        RegisteredUser(id="u2", player_name="Kalle R", account_name="kalle"),
        RegisteredUser(id="u3", player_name=None, account_name="Markko M"),
    ]


@pytest.fixture
def sample_manual_participants() -> list[ManualParticipant]:
    """Manual participant records."""
    return [
        ManualParticipant(id="m1", display_name="Georg G"),
        ManualParticipant(id="m2", display_name=None),
    ]


@pytest.fixture
def sample_results() -> list[RawResult]:
    """Results across three rallies and two classes."""
    return [
        # Round 1
        RawResult(rally_id="r1", user_id="u1", class_name="WRC", total_points=25),
        RawResult(rally_id="r1", user_id="u2", class_name="WRC", total_points=18),
        RawResult(
            rally_id="r1",
            manual_participant_id="m1",
            participant_name="georg",
            class_name="WRC",
            total_points=15,
        ),
        RawResult(
            rally_id="r1",
            participant_name="Guest Driver",
            class_name="Rally2",
            total_points=25,
        ),
        # Round 2
        RawResult(rally_id="r2", user_id="u2", class_name="WRC", total_points=25),
        RawResult(
            rally_id="r2",
            manual_participant_id="m1",
            participant_name="Georg",
            class_name="WRC",
            total_points=18,
        ),
        RawResult(
            rally_id="r2",
            participant_name="Guest Driver",
            class_name="Rally2",
            total_points=18,
        ),
        # Round 3
        RawResult(rally_id="r3", user_id="u1", class_name="WRC", total_points=18),
        RawResult(rally_id="r3", user_id="u3", class_name="Rally2", total_points=25),
    ]


@pytest.fixture
def red_team_members() -> list[RawMemberResult]:
    """Team with four members."""
    return [
        RawMemberResult(
            team_id="t1", team_name="Red", class_id="c1", user_id=user_id, points=points
        )
        for user_id, points in [("u4", 10), ("u1", 40), ("u3", 30), ("u2", 35)]
    ]


@pytest.fixture
def sample_team_totals() -> list[TeamTotal]:
    """Stored team totals for one rally and class."""
    return [
        TeamTotal(
            rally_id="r1",
            team_id="t1",
            team_name="Red",
            class_id="c1",
            class_name="WRC",
            team_total_points=105,
        ),
        TeamTotal(
            rally_id="r1",
            team_id="t2",
            team_name="Blue",
            class_id="c1",
            class_name="WRC",
            team_total_points=120,
        ),
    ]


@pytest.fixture
def snapshot_tables() -> dict[str, list[dict]]:
    """Table rows in the shape the REST API returns."""
    return {
        "championships": [{"id": "c1", "name": "Season 2025"}],
        "championship_rallies": [
            {
                "championship_id": "c1",
                "rally_id": "r2",
                "round_number": 2,
                "is_active": True,
                "rallies": {"name": "Rally Otepää", "competition_date": "2025-06-01"},
            },
            {
                "championship_id": "c1",
                "rally_id": "r1",
                "round_number": 1,
                "is_active": True,
                "rallies": {"name": "Rally Tartu", "competition_date": "2025-05-01"},
            },
            {
                "championship_id": "c1",
                "rally_id": "r9",
                "round_number": 3,
                "is_active": False,
                "rallies": {"name": "Cancelled"},
            },
        ],
        "rally_results": [
            {
                "rally_id": "r1",
                "user_id": "u1",
                "participant_name": None,
                "class_name": "WRC",
                "total_points": 25,
                "extra_points": 1,
            },
            {
                "rally_id": "r1",
                "manual_participant_id": "m1",
                "participant_name": "georg",
                "class_name": "WRC",
                "total_points": 18,
            },
            {
                "rally_id": "r2",
                "manual_participant_id": "m1",
                "participant_name": "Georg",
                "class_name": "WRC",
                "total_points": 25,
            },
            {
                "rally_id": "r2",
                "participant_name": "Guest Driver",
                "class_name": "Rally2",
                "total_points": 25,
            },
            {
                "rally_id": "r9",
                "user_id": "u1",
                "class_name": "WRC",
                "total_points": 25,
            },
        ],
        "users": [
            {"id": "u1", "player_name": "Ott T", "name": "ott"},
            {"id": "u2", "player_name": None, "name": "Kalle R"},
        ],
        "manual_participants": [{"id": "m1", "display_name": "Georg G"}],
        "team_rally_totals": [
            {
                "rally_id": "r1",
                "team_id": "t1",
                "team_name": "Red",
                "class_id": "c1",
                "class_name": "WRC",
                "team_total_points": 60,
            },
            {
                "rally_id": "r1",
                "team_id": "t2",
                "team_name": "Blue",
                "class_id": "c1",
                "class_name": "WRC",
                "team_total_points": 45,
            },
            {
                "rally_id": "r2",
                "team_id": "t2",
                "team_name": "Blue",
                "class_id": "c1",
                "class_name": "WRC",
                "team_total_points": 30,
            },
        ],
        "team_rally_results": [
            {"rally_id": "r1", "team_id": "t1", "user_id": "u1", "points": 35},
            {"rally_id": "r1", "team_id": "t1", "user_id": "u2", "points": 25},
            {
                "rally_id": "r1",
                "team_id": "t2",
                "user_id": "u3",
                "points": 45,
                "users": {"player_name": "Markko M"},
            },
        ],
    }
