"""Tests for mapping storage rows onto scoring models."""

from datetime import date

from src.persistence.normalize import (
    normalize_championship_rally,
    normalize_manual_participant,
    normalize_member_result,
    normalize_rally_result,
    normalize_rows,
    normalize_team_total,
    normalize_user,
)


class TestNormalizeRallyResult:
    """Tests for rally result rows."""

    def test_flat_row(self):
        """Test a flat row maps field for field."""
        result = normalize_rally_result(
            {
                "rally_id": "r1",
                "user_id": "u1",
                "manual_participant_id": None,
                "participant_name": "Ott",
                "class_name": "WRC",
                "total_points": 25,
                "extra_points": 2,
                "class_position": 1,
            }
        )

        assert result.rally_id == "r1"
        assert result.user_id == "u1"
        assert result.manual_participant_id is None
        assert result.overall_points == 27
        assert result.class_position == 1

    def test_nulls_and_empty_ids(self):
        """Test null points become zero and empty IDs become None."""
        result = normalize_rally_result(
            {
                "rally_id": 7,
                "user_id": "",
                "participant_name": None,
                "class_name": "WRC",
                "total_points": None,
                "extra_points": None,
                "class_position": 0,
            }
        )

        assert result.rally_id == "7"
        assert result.user_id is None
        assert result.participant_name == ""
        assert result.total_points == 0
        assert result.extra_points == 0
        assert result.class_position is None

    def test_class_from_joined_relation(self):
        """Test the class name comes from a one-element joined list."""
        result = normalize_rally_result(
            {
                "rally_id": "r1",
                "participant_name": "Guest",
                "class_name": None,
                "game_classes": [{"name": "Rally2"}],
                "total_points": "12",
            }
        )

        assert result.class_name == "Rally2"
        assert result.total_points == 12


class TestNormalizeChampionshipRally:
    """Tests for championship rally rows."""

    def test_nested_rally_object(self):
        """Test name and date come from the nested rally."""
        rally = normalize_championship_rally(
            {
                "rally_id": "r1",
                "round_number": 2,
                "rallies": {"name": "Rally Tartu", "competition_date": "2025-05-10"},
            }
        )

        assert rally.rally_id == "r1"
        assert rally.round_number == 2
        assert rally.rally_name == "Rally Tartu"
        assert rally.competition_date.date() == date(2025, 5, 10)

    def test_nested_rally_list_and_missing(self):
        """Test a joined list is unwrapped and a missing join tolerated."""
        listed = normalize_championship_rally(
            {"rally_id": "r1", "round_number": 1, "rallies": [{"name": "Listed"}]}
        )
        missing = normalize_championship_rally(
            {"rally_id": "r2", "round_number": 1, "rallies": None}
        )

        assert listed.rally_name == "Listed"
        assert missing.rally_name == ""
        assert missing.competition_date is None


class TestNormalizeTeamRows:
    """Tests for team totals and member rows."""

    def test_team_total(self):
        """Test team total rows."""
        total = normalize_team_total(
            {
                "rally_id": "r1",
                "team_id": 3,
                "team_name": "Red",
                "class_id": "c1",
                "class_name": "WRC",
                "team_total_points": 105,
                "participating_members": 4,
            }
        )

        assert total.team_id == "3"
        assert total.class_key == "c1"
        assert total.team_total_points == 105

    def test_team_total_class_key_falls_back_to_name(self):
        """Test the class name is the grouping key without a class ID."""
        total = normalize_team_total(
            {"rally_id": "r1", "team_id": "t1", "class_name": "WRC"}
        )

        assert total.class_key == "WRC"

    def test_member_overall_points_preferred(self):
        """Test overall points win over plain points."""
        member = normalize_member_result(
            {
                "team_id": "t1",
                "user_id": "u1",
                "overall_points": 30,
                "points": 25,
                "users": {"player_name": "Ott"},
            }
        )

        assert member.points == 30
        assert member.player_name == "Ott"

    def test_member_points_fallback(self):
        """Test plain points are used without overall points."""
        member = normalize_member_result(
            {"team_id": "t1", "user_id": "u1", "points": 25}
        )

        assert member.points == 25
        assert member.player_name is None


class TestNormalizeLookups:
    """Tests for user and manual participant rows."""

    def test_user(self):
        """Test user rows keep player and account names."""
        user = normalize_user({"id": "u1", "player_name": "", "name": "ott.t"})

        assert user.player_name is None
        assert user.display_name == "ott.t"

    def test_manual_participant(self):
        """Test manual participant rows."""
        manual = normalize_manual_participant({"id": 5, "display_name": "Georg"})

        assert manual.id == "5"
        assert manual.display_name == "Georg"

    def test_normalize_rows(self):
        """Test every row goes through the normalizer."""
        users = normalize_rows([{"id": "u1"}, {"id": "u2"}], normalize_user)

        assert [u.id for u in users] == ["u1", "u2"]
