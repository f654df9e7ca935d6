"""Team rally results and team championship standings."""

import logging
from collections.abc import Iterable

from src.models.participant import UNKNOWN_PLAYER, RegisteredParticipant, RegisteredUser
from src.models.result import ChampionshipRally
from src.models.team import (
    TEAM_CONTRIBUTOR_COUNT,
    MemberContribution,
    RawMemberResult,
    Team,
    TeamChampionshipStanding,
    TeamChampionshipStandings,
    TeamRallyPoints,
    TeamRallyResult,
    TeamTotal,
)
from src.processor.championship import NO_RALLIES_WARNING

logger = logging.getLogger(__name__)


def fill_member_names(
    member_results: Iterable[RawMemberResult],
    users: Iterable[RegisteredUser] = (),
) -> list[RawMemberResult]:
    """
    Fill in missing member display names from the registered users.

    Args:
        member_results: Member point rows
        users: Registered users for display name lookup

    Returns:
        Copies of the rows, each with a player name
    """
    names = {u.id: u.display_name for u in users if u.display_name}

    return [
        m
        if m.player_name
        else m.model_copy(
            update={"player_name": names.get(m.user_id, UNKNOWN_PLAYER)}
        )
        for m in member_results
    ]


def build_team_rosters(member_results: Iterable[RawMemberResult]) -> list[Team]:
    """Group member rows into teams, in first-seen order."""
    teams: dict[str, Team] = {}

    for member in member_results:
        team = teams.get(member.team_id)
        if team is None:
            team = Team(
                id=member.team_id,
                name=member.team_name,
                class_id=member.class_id,
                class_name=member.class_name,
            )
            teams[member.team_id] = team
        if all(p.user_id != member.user_id for p in team.members):
            team.members.append(
                RegisteredParticipant(
                    user_id=member.user_id,
                    display_name=member.player_name or UNKNOWN_PLAYER,
                )
            )

    return list(teams.values())


def mark_contributors(
    members: list[MemberContribution],
    contributor_count: int = TEAM_CONTRIBUTOR_COUNT,
) -> list[MemberContribution]:
    """
    Sort members by points and flag the best scorers as contributing.

    Teams with fewer members than contributor_count have every member
    contributing.

    Args:
        members: A single team's member contributions
        contributor_count: Number of members counted for the team

    Returns:
        Members sorted by points (descending), top scorers flagged
    """
    sorted_members = sorted(
        members,
        key=lambda m: (-m.points, m.player_name, m.participant.user_id),
    )

    for i, member in enumerate(sorted_members):
        member.contributed = i < contributor_count

    return sorted_members


def aggregate_team_rally(
    rally_id: str,
    class_id: str | None,
    team_totals: Iterable[TeamTotal],
    member_results: Iterable[RawMemberResult],
    users: Iterable[RegisteredUser] = (),
    contributor_count: int = TEAM_CONTRIBUTOR_COUNT,
) -> list[TeamRallyResult]:
    """
    Build ranked team results for a rally.

    The team total is the stored team total. The contributors' sum is kept
    alongside it and any difference is flagged as a mismatch.

    Args:
        rally_id: Rally ID
        class_id: Restrict to one class, or None for every class of the rally
        team_totals: Stored per-rally team totals
        member_results: Member point rows for the rally
        users: Registered users for display name lookup
        contributor_count: Number of members counted for the team

    Returns:
        Team results grouped by class, ranked within each class
    """
    totals = [
        t
        for t in team_totals
        if t.rally_id == rally_id and (class_id is None or t.class_key == class_id)
    ]
    if not totals:
        logger.info(f"No team results found for rally {rally_id}")
        return []

    team_ids = {t.team_id for t in totals}
    members = fill_member_names(
        (m for m in member_results if m.team_id in team_ids),
        users,
    )

    # Duplicate rows keep the highest points, the first one on ties
    points_by_member: dict[tuple[str, str], int] = {}
    for member in members:
        key = (member.team_id, member.user_id)
        if key not in points_by_member or member.points > points_by_member[key]:
            points_by_member[key] = member.points

    members_by_team: dict[str, list[MemberContribution]] = {}
    for team in build_team_rosters(members):
        contributions = [
            MemberContribution(
                participant=participant,
                points=points_by_member[(team.id, participant.user_id)],
            )
            for participant in team.members
        ]
        members_by_team[team.id] = mark_contributors(contributions, contributor_count)

    by_class: dict[str, list[TeamRallyResult]] = {}
    for total in totals:
        team_members = members_by_team.get(total.team_id, [])
        contributor_points = sum(m.points for m in team_members if m.contributed)
        mismatch = bool(team_members) and contributor_points != total.team_total_points

        if mismatch:
            logger.warning(
                f"Team {total.team_name or total.team_id} total "
                f"{total.team_total_points} differs from best "
                f"{contributor_count} sum {contributor_points} in rally {rally_id}"
            )

        by_class.setdefault(total.class_key, []).append(
            TeamRallyResult(
                rally_id=rally_id,
                team_id=total.team_id,
                team_name=total.team_name,
                class_id=total.class_id,
                class_name=total.class_name,
                members=team_members,
                total_points=total.team_total_points,
                contributor_points=contributor_points,
                total_mismatch=mismatch,
            )
        )

    results: list[TeamRallyResult] = []
    for class_key in sorted(by_class, key=lambda k: (by_class[k][0].class_name, k)):
        results.extend(_calculate_team_positions(by_class[class_key]))

    logger.info(f"Team results for rally {rally_id}: {len(results)} teams")
    return results


def _calculate_team_positions(results: list[TeamRallyResult]) -> list[TeamRallyResult]:
    """Rank one class: total points, then team name, then team ID."""
    sorted_results = sorted(
        results,
        key=lambda r: (-r.total_points, r.team_name, r.team_id),
    )

    for i, result in enumerate(sorted_results):
        result.team_position = i + 1

    return sorted_results


def aggregate_team_championship(
    championship_id: str,
    rallies: Iterable[ChampionshipRally],
    team_totals: Iterable[TeamTotal],
) -> TeamChampionshipStandings:
    """
    Sum team rally totals across a championship.

    Args:
        championship_id: Championship ID
        rallies: The championship's rallies with their round numbers
        team_totals: Stored per-rally team totals

    Returns:
        TeamChampionshipStandings grouped by class ID, or class name where
        no class ID is stored
    """
    sorted_rallies = sorted(rallies, key=lambda r: r.round_number)
    if not sorted_rallies:
        logger.warning(f"No rallies found for team championship: {championship_id}")
        return TeamChampionshipStandings(
            championship_id=championship_id,
            warnings=[NO_RALLIES_WARNING],
        )

    rally_ids = {r.rally_id for r in sorted_rallies}

    # (team ID, class key) -> rally ID -> points
    team_points: dict[tuple[str, str], dict[str, int]] = {}
    team_names: dict[str, str] = {}
    # class key -> (class ID, class name)
    classes_seen: dict[str, tuple[str | None, str]] = {}
    for total in team_totals:
        if total.rally_id not in rally_ids:
            continue
        rally_points = team_points.setdefault((total.team_id, total.class_key), {})
        rally_points[total.rally_id] = (
            rally_points.get(total.rally_id, 0) + total.team_total_points
        )
        team_names.setdefault(total.team_id, total.team_name)
        classes_seen.setdefault(total.class_key, (total.class_id, total.class_name))

    by_class: dict[str, list[TeamChampionshipStanding]] = {}
    for (team_id, class_key), rally_points in team_points.items():
        points = [
            TeamRallyPoints(
                rally_id=rally.rally_id,
                round_number=rally.round_number,
                points=rally_points.get(rally.rally_id, 0),
                participated=rally.rally_id in rally_points,
            )
            for rally in sorted_rallies
        ]
        by_class.setdefault(class_key, []).append(
            TeamChampionshipStanding(
                team_id=team_id,
                team_name=team_names.get(team_id, ""),
                class_id=classes_seen[class_key][0],
                class_name=classes_seen[class_key][1],
                rally_points=points,
                total_points=sum(p.points for p in points),
                rallies_scored=sum(1 for p in points if p.participated),
            )
        )

    classes: dict[str, list[TeamChampionshipStanding]] = {}
    for class_key in sorted(by_class, key=lambda k: (classes_seen[k][1], k)):
        standings = sorted(
            by_class[class_key],
            key=lambda s: (-s.total_points, -s.rallies_scored, s.team_name, s.team_id),
        )
        for i, standing in enumerate(standings):
            standing.position = i + 1
        classes[class_key] = standings

    return TeamChampionshipStandings(
        championship_id=championship_id,
        total_rounds=len(sorted_rallies),
        classes=classes,
    )
