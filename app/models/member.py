"""Immutable team member snapshot consumed by the hierarchy engine."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from app.models.permissions import Permissions
from app.models.role import Department, MemberStatus, TeamRole

if TYPE_CHECKING:
    from app.models.team_member import TeamMember


@dataclass(frozen=True)
class Member:
    """
    Point-in-time view of a team member.

    The engine never reads the database; it works on lists of these
    snapshots fetched by the caller. Ids are strings so snapshots built by
    hand (tests, imports) and from database rows compare the same way.

    Attributes:
        id: Member identifier
        full_name: Display name, used as ordering tie-break
        role: Ranked team role
        department: Department the member works in
        manager_id: Id of the direct manager, None for a root
        status: Employment status
        policy: Permission policy owned by this member
        email: Contact email, used by search
    """

    id: str
    full_name: str
    role: TeamRole
    department: Department = Department.OTHER
    manager_id: str | None = None
    status: MemberStatus = MemberStatus.ACTIVE
    policy: Permissions = field(default_factory=Permissions)
    email: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    @classmethod
    def from_record(cls, record: "TeamMember") -> "Member":
        """Build a snapshot from a persisted team_members row"""
        return cls(
            id=str(record.id),
            full_name=record.full_name,
            role=TeamRole(record.role),
            department=Department(record.department),
            manager_id=str(record.manager_id) if record.manager_id is not None else None,
            status=MemberStatus(record.status),
            policy=Permissions.model_validate(record.permissions or {}),
            email=record.email or "",
        )

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, role={self.role.value}, manager_id={self.manager_id})>"
