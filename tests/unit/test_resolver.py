"""Tests for participant resolution."""

from src.models import (
    ManualLinkedParticipant,
    ManualParticipant,
    ManualUnlinkedParticipant,
    RawResult,
    RegisteredParticipant,
    RegisteredUser,
    UserDirectory,
)
from src.resolver import resolve_participant, resolve_participants


def create_result(
    rally_id: str = "r1",
    user_id: str | None = None,
    manual_participant_id: str | None = None,
    participant_name: str = "",
    class_name: str = "WRC",
    total_points: int = 0,
) -> RawResult:
    """Helper to create raw results for testing."""
    return RawResult(
        rally_id=rally_id,
        user_id=user_id,
        manual_participant_id=manual_participant_id,
        participant_name=participant_name,
        class_name=class_name,
        total_points=total_points,
    )


class TestResolveParticipant:
    """Tests for single-row resolution."""

    def test_registered_user(self):
        """Test a row with a user ID resolves to a registered participant."""
        directory = UserDirectory(users=[RegisteredUser(id="u1", player_name="Ott")])

        participant = resolve_participant(create_result(user_id="u1"), directory)

        assert isinstance(participant, RegisteredParticipant)
        assert participant.key == "user:u1"
        assert participant.participant_type == "registered"
        assert participant.display_name == "Ott"

    def test_registered_user_falls_back_to_account_name(self):
        """Test account name is used when the player name is missing."""
        directory = UserDirectory(
            users=[RegisteredUser(id="u1", player_name=None, account_name="ott.t")]
        )

        participant = resolve_participant(create_result(user_id="u1"), directory)

        assert participant.display_name == "ott.t"

    def test_unknown_registered_user_uses_row_name(self):
        """Test a user missing from the lookup keeps the row's name."""
        participant = resolve_participant(
            create_result(user_id="u9", participant_name="Typed Name"),
            UserDirectory(),
        )

        assert participant.key == "user:u9"
        assert participant.display_name == "Typed Name"

    def test_unknown_registered_user_without_any_name(self):
        """Test a user with no name anywhere gets a placeholder."""
        participant = resolve_participant(create_result(user_id="u9"), UserDirectory())

        assert participant.display_name == "Unknown Player"

    def test_manual_linked(self):
        """Test a row with a manual participant ID resolves to manual_linked."""
        directory = UserDirectory(
            manual_participants=[ManualParticipant(id="m1", display_name="Georg G")]
        )

        participant = resolve_participant(
            create_result(manual_participant_id="m1", participant_name="georg"),
            directory,
        )

        assert isinstance(participant, ManualLinkedParticipant)
        assert participant.key == "manual:m1"
        assert participant.display_name == "Georg G"

    def test_manual_linked_falls_back_to_row_name(self):
        """Test the row's name is used when the manual record has no name."""
        participant = resolve_participant(
            create_result(manual_participant_id="m1", participant_name="georg"),
            UserDirectory(),
        )

        assert participant.display_name == "georg"

    def test_unlinked(self):
        """Test a row with neither ID is keyed on name and class."""
        participant = resolve_participant(
            create_result(participant_name="Guest Driver", class_name="Rally2"),
            UserDirectory(),
        )

        assert isinstance(participant, ManualUnlinkedParticipant)
        assert participant.key == "unlinked:Guest Driver:Rally2"
        assert participant.display_name == "Guest Driver"
        assert participant.is_linked is False

    def test_user_id_takes_priority(self):
        """Test user ID wins when a row carries several identifiers."""
        participant = resolve_participant(
            create_result(
                user_id="u1",
                manual_participant_id="m1",
                participant_name="Someone",
            ),
            UserDirectory(),
        )

        assert participant.key == "user:u1"

    def test_manual_id_takes_priority_over_name(self):
        """Test manual participant ID wins over the free-text name."""
        participant = resolve_participant(
            create_result(manual_participant_id="m1", participant_name="Someone"),
            UserDirectory(),
        )

        assert participant.key == "manual:m1"

    def test_malformed_row(self):
        """Test a row without identity or name resolves to None."""
        assert resolve_participant(create_result(), UserDirectory()) is None
        assert (
            resolve_participant(create_result(participant_name="   "), UserDirectory())
            is None
        )


class TestResolveParticipants:
    """Tests for a full resolution pass."""

    def test_same_user_across_rallies_merged(self):
        """Test rows sharing a user ID resolve to one participant."""
        resolution = resolve_participants(
            [
                create_result(rally_id="r1", user_id="u1", class_name="WRC"),
                create_result(rally_id="r2", user_id="u1", class_name="Rally2"),
            ]
        )

        assert len(resolution.participants) == 1
        assert resolution.row_keys == ["user:u1", "user:u1"]
        assert resolution.linked_rows == 2

    def test_unlinked_exact_match_merged(self):
        """Test identical name and class across rallies is one participant."""
        resolution = resolve_participants(
            [
                create_result(rally_id="r1", participant_name="Guest"),
                create_result(rally_id="r2", participant_name="Guest"),
            ]
        )

        assert len(resolution.participants) == 1
        assert resolution.unlinked_rows == 2
        assert resolution.unlinked_names == ["Guest"]

    def test_near_duplicate_names_not_merged(self):
        """Test names differing in case or spacing stay separate."""
        resolution = resolve_participants(
            [
                create_result(rally_id="r1", participant_name="Guest"),
                create_result(rally_id="r2", participant_name="guest"),
                create_result(rally_id="r3", participant_name="Guest "),
            ]
        )

        assert len(resolution.participants) == 3
        assert resolution.unlinked_participants == 3

    def test_same_name_different_class_not_merged(self):
        """Test the class is part of the unlinked key."""
        resolution = resolve_participants(
            [
                create_result(participant_name="Guest", class_name="WRC"),
                create_result(participant_name="Guest", class_name="Rally2"),
            ]
        )

        assert {p.key for p in resolution.participants} == {
            "unlinked:Guest:WRC",
            "unlinked:Guest:Rally2",
        }

    def test_separator_in_name_or_class_not_merged(self):
        """Test a colon in the name or class cannot make two keys collide."""
        resolution = resolve_participants(
            [
                create_result(participant_name="Ott:Tanak", class_name="Rally2"),
                create_result(participant_name="Ott", class_name="Tanak:Rally2"),
            ]
        )

        assert len(resolution.participants) == 2
        assert resolution.unlinked_participants == 2
        assert resolution.row_keys[0] != resolution.row_keys[1]
        assert [p.display_name for p in resolution.participants] == [
            "Ott:Tanak",
            "Ott",
        ]

    def test_malformed_rows_excluded_and_warned(self):
        """Test malformed rows get no key and produce a warning."""
        resolution = resolve_participants(
            [
                create_result(user_id="u1"),
                create_result(participant_name=""),
                create_result(participant_name=""),
            ]
        )

        assert resolution.row_keys == ["user:u1", None, None]
        assert resolution.malformed_rows == [1, 2]
        assert len(resolution.participants) == 1
        assert any("2 results skipped" in w for w in resolution.warnings)
        assert not any(p.key.startswith("unlinked:") for p in resolution.participants)

    def test_unlinked_warnings(self):
        """Test one warning per distinct unlinked name plus a summary."""
        resolution = resolve_participants(
            [
                create_result(rally_id="r1", participant_name="Guest A"),
                create_result(rally_id="r2", participant_name="Guest A"),
                create_result(rally_id="r1", participant_name="Guest B"),
                create_result(user_id="u1"),
            ]
        )

        assert resolution.warnings[0].startswith("2 unlinked participants found")
        assert "Unlinked participant: Guest A" in resolution.warnings
        assert "Unlinked participant: Guest B" in resolution.warnings
        assert resolution.linked_rows == 1
        assert resolution.unlinked_rows == 3

    def test_no_warnings_when_all_linked(self):
        """Test fully linked data produces no warnings."""
        resolution = resolve_participants(
            [create_result(user_id="u1"), create_result(manual_participant_id="m1")]
        )

        assert resolution.warnings == []
        assert resolution.linked_participants == 2

    def test_participants_in_first_seen_order(self):
        """Test participants are listed in the order first encountered."""
        resolution = resolve_participants(
            [
                create_result(user_id="u2"),
                create_result(manual_participant_id="m1"),
                create_result(user_id="u1"),
                create_result(user_id="u2"),
            ]
        )

        assert [p.key for p in resolution.participants] == [
            "user:u2",
            "manual:m1",
            "user:u1",
        ]

    def test_repeatable(self, sample_results, sample_users, sample_manual_participants):
        """Test two passes over the same input are identical."""
        first = resolve_participants(
            sample_results, sample_users, sample_manual_participants
        )
        second = resolve_participants(
            sample_results, sample_users, sample_manual_participants
        )

        assert first.model_dump_json() == second.model_dump_json()

    def test_get_by_key(self, sample_results, sample_users):
        """Test looking up a resolved participant by key."""
        resolution = resolve_participants(sample_results, sample_users)

        assert resolution.get("user:u1").display_name == "Ott T"
        assert resolution.get("user:missing") is None
