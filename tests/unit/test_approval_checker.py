"""Unit tests for the approval checker."""

import logging
from typing import Any

import pytest

from approve_label.approval.checker import (
    check_approval,
    check_team_memberships,
    is_approver,
    lookup_team_membership,
    parse_team_slugs,
)
from approve_label.approval.models import ApprovalDecision, TeamLookupResult, TeamMembershipStatus
from approve_label.github.exceptions import GraphQLTransportError, OrganizationNotFoundError
from approve_label.github.models import TeamMember
from approve_label.runner.event import TriggerEvent


@pytest.fixture
def platform_adapter(fake_adapter: Any) -> Any:
    """Organization with a platform team of alice and a security team of carol."""
    fake_adapter.teams = {
        "platform": [TeamMember(login="alice"), TeamMember(login="dave")],
        "security": [TeamMember(login="carol")],
    }
    return fake_adapter


class TestParseTeamSlugs:
    """Tests for turning the team configuration into slugs."""

    def test_normalizes_and_deduplicates(self) -> None:
        assert parse_team_slugs("Platform, security ,platform,  ,Platform Team") == ["platform", "security", "platform-team"]

    @pytest.mark.parametrize("value", [None, "", " , "])
    def test_empty_configuration(self, value: str | None) -> None:
        assert parse_team_slugs(value) == []


@pytest.mark.asyncio
async def test_lookup_member_found(platform_adapter: Any) -> None:
    """Test that a member of the team is FOUND."""
    result = await lookup_team_membership(platform_adapter, "alice", "octo-org", "platform")
    assert result == TeamLookupResult("platform", TeamMembershipStatus.FOUND)


@pytest.mark.asyncio
async def test_lookup_login_match_is_exact(platform_adapter: Any) -> None:
    """Test that logins are compared exactly."""
    result = await lookup_team_membership(platform_adapter, "Alice", "octo-org", "platform")
    assert result.status is TeamMembershipStatus.NOT_A_MEMBER


@pytest.mark.asyncio
async def test_lookup_missing_team(platform_adapter: Any) -> None:
    """Test that a team missing from the organization is reported, not raised."""
    result = await lookup_team_membership(platform_adapter, "alice", "octo-org", "ghost")
    assert result.status is TeamMembershipStatus.TEAM_NOT_FOUND
    assert result.message is not None
    assert "octo-org/ghost" in result.message


@pytest.mark.asyncio
async def test_lookup_missing_organization(platform_adapter: Any) -> None:
    """Test that a missing organization is reported as a missing team."""
    platform_adapter.team_errors["platform"] = OrganizationNotFoundError("octo-org")
    result = await lookup_team_membership(platform_adapter, "alice", "octo-org", "platform")
    assert result.status is TeamMembershipStatus.TEAM_NOT_FOUND


@pytest.mark.asyncio
async def test_lookup_transport_error(platform_adapter: Any, caplog: pytest.LogCaptureFixture) -> None:
    """Test that a failed request becomes TRANSPORT_ERROR and is logged."""
    platform_adapter.team_errors["platform"] = GraphQLTransportError("connection reset")
    with caplog.at_level(logging.WARNING):
        result = await lookup_team_membership(platform_adapter, "alice", "octo-org", "platform")
    assert result.status is TeamMembershipStatus.TRANSPORT_ERROR
    assert result.message == "connection reset"
    assert "Team membership lookup failed" in caplog.text


@pytest.mark.asyncio
async def test_check_team_memberships_keeps_team_order(platform_adapter: Any) -> None:
    """Test that results come back in the configured team order."""
    results = await check_team_memberships(platform_adapter, "carol", "octo-org", ["platform", "ghost", "security"])
    assert [(result.team_slug, result.status) for result in results] == [
        ("platform", TeamMembershipStatus.NOT_A_MEMBER),
        ("ghost", TeamMembershipStatus.TEAM_NOT_FOUND),
        ("security", TeamMembershipStatus.FOUND),
    ]


@pytest.mark.asyncio
async def test_check_team_memberships_one_failure_does_not_stop_others(platform_adapter: Any) -> None:
    """Test that a lookup failing for one team does not affect the other lookups."""
    platform_adapter.team_errors["platform"] = GraphQLTransportError("timeout")
    results = await check_team_memberships(platform_adapter, "carol", "octo-org", ["platform", "security"])
    assert [result.status for result in results] == [TeamMembershipStatus.TRANSPORT_ERROR, TeamMembershipStatus.FOUND]
    assert len(platform_adapter.calls_to("get_team_members")) == 2


@pytest.mark.asyncio
async def test_check_team_memberships_without_teams(platform_adapter: Any) -> None:
    """Test that no teams means no lookups."""
    assert await check_team_memberships(platform_adapter, "alice", "octo-org", []) == []
    assert platform_adapter.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "sender,teams,expected",
    [
        pytest.param("alice", ["platform", "security"], True, id="member of first team"),
        pytest.param("carol", ["platform", "security"], True, id="member of second team"),
        pytest.param("bob", ["platform", "security"], False, id="member of no team"),
        pytest.param("alice", [], False, id="no teams configured"),
        pytest.param("alice", ["ghost"], False, id="only a missing team"),
    ],
)
async def test_is_approver(platform_adapter: Any, sender: str, teams: list[str], expected: bool) -> None:
    """Test membership in at least one team."""
    assert await is_approver(platform_adapter, sender, "octo-org", teams) is expected


@pytest.mark.asyncio
async def test_check_approval_passes_for_member_with_expected_label(platform_adapter: Any, labeled_event: TriggerEvent) -> None:
    """Test that alice applying the expected label passes."""
    decision = await check_approval(platform_adapter, labeled_event, "octo-org", ["platform"], "Label Action")
    assert decision.passed
    assert decision.failure_message is None


@pytest.mark.asyncio
async def test_check_approval_fails_for_non_member(platform_adapter: Any, labeled_event: TriggerEvent) -> None:
    """Test that bob applying the expected label fails with the approver message."""
    event = labeled_event.model_copy(update={"sender_login": "bob"})
    decision = await check_approval(platform_adapter, event, "octo-org", ["platform"], "Label Action")
    assert not decision.passed
    assert decision.failure_message == "bob is not a valid approver for label Label Action"


@pytest.mark.asyncio
async def test_check_approval_fails_for_other_label(platform_adapter: Any, labeled_event: TriggerEvent) -> None:
    """Test that a member applying a different label fails."""
    event = labeled_event.model_copy(update={"label_name": "wip"})
    decision = await check_approval(platform_adapter, event, "octo-org", ["platform"], "Label Action")
    assert decision.is_approver
    assert not decision.label_matches
    assert not decision.passed
    assert decision.failure_message == "alice is not a valid approver for label Label Action"


@pytest.mark.asyncio
async def test_check_approval_fails_without_label(platform_adapter: Any, labeled_event: TriggerEvent) -> None:
    """Test that an event without a label never passes."""
    event = labeled_event.model_copy(update={"label_name": None})
    decision = await check_approval(platform_adapter, event, "octo-org", ["platform"], "Label Action")
    assert not decision.passed


@pytest.mark.asyncio
async def test_check_approval_reports_missing_team(platform_adapter: Any, labeled_event: TriggerEvent) -> None:
    """Test that a missing team fails the check even when the sender is in another team."""
    decision = await check_approval(platform_adapter, labeled_event, "octo-org", ["platform", "ghost"], "Label Action")
    assert decision.is_approver
    assert decision.missing_teams == ["ghost"]
    assert not decision.passed
    assert decision.failure_message == "can't find team(s) ghost in octo-org organization"
    assert len(platform_adapter.calls_to("get_team_members")) == 2


def test_decision_without_lookups_is_not_approver() -> None:
    """Test the decision for an empty team list."""
    decision = ApprovalDecision(sender="alice", organization="octo-org", expected_label="Label Action", triggering_label="Label Action")
    assert not decision.is_approver
    assert not decision.passed
