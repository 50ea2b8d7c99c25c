"""Team context for request authorization."""

from dataclasses import dataclass
from app.models.user import User
from app.models.tenant import Tenant
from app.models.team_member import TeamMember
from app.models.member import Member
from app.models.role import TeamRole


@dataclass
class TeamContext:
    """
    Complete team context for request authorization.

    Built from the JWT (user and tenant claims) and verified against the
    database. The acting member's snapshot is what authorization checks
    run against.

    Attributes:
        user: The authenticated User object
        tenant: The Tenant the user is accessing
        record: The user's team_members row in this tenant
    """

    user: User
    tenant: Tenant
    record: TeamMember

    @property
    def member(self) -> Member:
        return Member.from_record(self.record)

    @property
    def role(self) -> TeamRole:
        return TeamRole(self.record.role)

    def __repr__(self) -> str:
        return (
            f"<TeamContext(user_id={self.user.id}, tenant_id={self.tenant.id}, "
            f"member_id={self.record.id}, role={self.role.value})>"
        )
