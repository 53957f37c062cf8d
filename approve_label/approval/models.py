"""Data models for the approval check."""

from dataclasses import dataclass, field
from enum import Enum


class TeamMembershipStatus(str, Enum):
    """Outcome of looking a sender up in one team."""

    FOUND = "found"
    NOT_A_MEMBER = "not_a_member"
    TEAM_NOT_FOUND = "team_not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class TeamLookupResult:
    """Tagged result of a single team membership lookup."""

    team_slug: str
    status: TeamMembershipStatus
    message: str | None = None


@dataclass
class ApprovalDecision:
    """Outcome of the approval check for one trigger event."""

    sender: str
    organization: str
    expected_label: str
    triggering_label: str | None
    lookups: list[TeamLookupResult] = field(default_factory=list)

    @property
    def is_approver(self) -> bool:
        return any(lookup.status is TeamMembershipStatus.FOUND for lookup in self.lookups)

    @property
    def label_matches(self) -> bool:
        return self.triggering_label == self.expected_label

    @property
    def missing_teams(self) -> list[str]:
        return [lookup.team_slug for lookup in self.lookups if lookup.status is TeamMembershipStatus.TEAM_NOT_FOUND]

    @property
    def passed(self) -> bool:
        return self.is_approver and self.label_matches and not self.missing_teams

    @property
    def failure_message(self) -> str | None:
        """Return the message reported to the runner, or None when the check passed."""
        if self.missing_teams:
            teams = ", ".join(self.missing_teams)
            return f"can't find team(s) {teams} in {self.organization} organization"
        if not self.passed:
            return f"{self.sender} is not a valid approver for label {self.expected_label}"
        return None
