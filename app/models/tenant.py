"""Tenant model for multi-tenant isolation."""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.team_member import TeamMember


class Tenant(Base, TimestampMixin):
    """
    Agency workspace and isolation boundary.

    Every team member belongs to exactly one tenant, and each tenant has its
    own management hierarchy rooted at its CEO. Hierarchy snapshots are
    always fetched per tenant.
    """

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    team_members: Mapped[list["TeamMember"]] = relationship(
        "TeamMember",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name='{self.name}')>"
