"""Decides whether the sender of an event belongs to an approving team."""

import asyncio

import structlog

from approve_label.github.abc import GitHubGraphQLClientBase
from approve_label.github.exceptions import GitHubGraphQLError, OrganizationNotFoundError, TeamNotFoundError
from approve_label.runner.event import TriggerEvent
from approve_label.utils.github import normalize_team_slug, split_comma_separated

from .models import ApprovalDecision, TeamLookupResult, TeamMembershipStatus

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def parse_team_slugs(value: str | None) -> list[str]:
    """Turn the comma-separated team configuration into unique, normalized team slugs."""
    slugs: list[str] = []
    for entry in split_comma_separated(value):
        slug = normalize_team_slug(entry)
        if slug and slug not in slugs:
            slugs.append(slug)
    return slugs


async def lookup_team_membership(
    adapter: GitHubGraphQLClientBase,
    sender: str,
    organization: str,
    team_slug: str,
) -> TeamLookupResult:
    """Look the sender up in one team.

    API failures never propagate: a missing team or organization becomes
    ``TEAM_NOT_FOUND`` and any other failure becomes ``TRANSPORT_ERROR``.
    """
    try:
        members = await adapter.get_team_members(organization, team_slug)
    except (TeamNotFoundError, OrganizationNotFoundError) as exc:
        logger.warning("Team not found", team_slug=team_slug, organization=organization, error=str(exc))
        return TeamLookupResult(team_slug, TeamMembershipStatus.TEAM_NOT_FOUND, str(exc))
    except GitHubGraphQLError as exc:
        logger.warning("Team membership lookup failed", team_slug=team_slug, organization=organization, error=str(exc))
        return TeamLookupResult(team_slug, TeamMembershipStatus.TRANSPORT_ERROR, str(exc))

    if any(member.login == sender for member in members):
        logger.info("Sender is a member of team", sender=sender, team_slug=team_slug)
        return TeamLookupResult(team_slug, TeamMembershipStatus.FOUND)

    logger.info("Sender is not a member of team", sender=sender, team_slug=team_slug, member_count=len(members))
    return TeamLookupResult(team_slug, TeamMembershipStatus.NOT_A_MEMBER)


async def check_team_memberships(
    adapter: GitHubGraphQLClientBase,
    sender: str,
    organization: str,
    team_slugs: list[str],
) -> list[TeamLookupResult]:
    """Look the sender up in every team concurrently and return the results in team order."""
    if not team_slugs:
        return []
    results = await asyncio.gather(*(lookup_team_membership(adapter, sender, organization, team_slug) for team_slug in team_slugs))
    return list(results)


async def is_approver(
    adapter: GitHubGraphQLClientBase,
    sender: str,
    organization: str,
    team_slugs: list[str],
) -> bool:
    """Return True when the sender is a member of at least one existing team."""
    results = await check_team_memberships(adapter, sender, organization, team_slugs)
    return any(result.status is TeamMembershipStatus.FOUND for result in results)


async def check_approval(
    adapter: GitHubGraphQLClientBase,
    event: TriggerEvent,
    organization: str,
    team_slugs: list[str],
    expected_label: str,
) -> ApprovalDecision:
    """Check team membership of the event's sender together with the triggering label."""
    logger.info(
        "Checking approval",
        sender=event.sender_login,
        organization=organization,
        team_slugs=team_slugs,
        expected_label=expected_label,
        triggering_label=event.label_name,
    )
    lookups = await check_team_memberships(adapter, event.sender_login, organization, team_slugs)
    decision = ApprovalDecision(
        sender=event.sender_login,
        organization=organization,
        expected_label=expected_label,
        triggering_label=event.label_name,
        lookups=lookups,
    )
    logger.info(
        "Approval decided",
        sender=decision.sender,
        is_approver=decision.is_approver,
        label_matches=decision.label_matches,
        missing_teams=decision.missing_teams,
        passed=decision.passed,
    )
    return decision
