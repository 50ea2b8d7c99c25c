"""Team member model: a user's position inside a tenant's hierarchy."""

from datetime import date
from sqlalchemy import String, Integer, ForeignKey, Enum, Date, Text, JSON, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.models.base import Base, TimestampMixin
from app.models.role import TeamRole, Department, MemberStatus

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.tenant import Tenant


def _enum_column(enum_cls: type) -> Enum:
    return Enum(enum_cls, native_enum=False, values_callable=lambda x: [e.value for e in x])


class TeamMember(Base, TimestampMixin):
    """
    Persisted team member record.

    manager_id references another member of the same tenant and forms the
    edges of the management tree. It is only changed after the hierarchy
    validator accepts the edit. permissions holds the member's policy as
    JSON (see app.models.permissions.Permissions).

    Constraints:
    - Unique(tenant_id, user_id) - one position per user per tenant
    - One CEO per tenant (enforced at application layer)
    """

    __tablename__ = "team_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[TeamRole] = mapped_column(
        _enum_column(TeamRole), nullable=False, default=TeamRole.MID_LEVEL
    )
    department: Mapped[Department] = mapped_column(
        _enum_column(Department), nullable=False, default=Department.OTHER
    )
    manager_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("team_members.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    status: Mapped[MemberStatus] = mapped_column(
        _enum_column(MemberStatus), nullable=False, default=MemberStatus.ACTIVE
    )
    permissions: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="team_members")
    user: Mapped["User"] = relationship("User", back_populates="team_memberships")

    __table_args__ = (
        UniqueConstraint("tenant_id", "user_id", name="uq_team_member_tenant_user"),
        Index("ix_team_members_tenant_manager", "tenant_id", "manager_id"),
    )

    def __repr__(self) -> str:
        return f"<TeamMember(id={self.id}, tenant_id={self.tenant_id}, role={self.role.value})>"
