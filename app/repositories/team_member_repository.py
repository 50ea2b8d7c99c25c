"""Repository for TeamMember model operations (member directory store)."""

from sqlalchemy.orm import Session
from app.models.team_member import TeamMember
from app.schemas.team_schemas import MemberPatch


class TeamMemberRepository:
    """Directory store backing hierarchy snapshots and validated edits"""

    def __init__(self, db: Session):
        self.db = db

    def list_members(self, tenant_id: int) -> list[TeamMember]:
        """
        Full member snapshot of a tenant for graph construction.

        Args:
            tenant_id: Tenant ID

        Returns:
            All TeamMember rows of the tenant, in id order
        """
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.tenant_id == tenant_id)
            .order_by(TeamMember.id)
            .all()
        )

    def get_member(self, member_id: int, tenant_id: int) -> TeamMember | None:
        """
        Get a member ensuring it belongs to the tenant.

        Returns None if the member doesn't exist or belongs to another tenant.
        """
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.id == member_id, TeamMember.tenant_id == tenant_id)
            .first()
        )

    def get_by_user(self, user_id: int, tenant_id: int) -> TeamMember | None:
        """Get the member record of a user inside a tenant"""
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.user_id == user_id, TeamMember.tenant_id == tenant_id)
            .first()
        )

    def create(self, member: TeamMember) -> TeamMember:
        """Create new team member"""
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        return member

    def update_member(self, member: TeamMember, patch: MemberPatch) -> TeamMember:
        """
        Apply an already-validated patch.

        Only fields explicitly set on the patch are written, so a patch that
        sets manager_id to None detaches the member while an empty patch is a
        no-op.

        Args:
            member: TeamMember row to update
            patch: Fields to change

        Returns:
            Updated TeamMember object
        """
        changes = patch.model_dump(exclude_unset=True, mode="json")
        if "manager_id" in changes:
            member.manager_id = changes["manager_id"]
        if "permissions" in changes:
            member.permissions = changes["permissions"]
        self.db.commit()
        self.db.refresh(member)
        return member
