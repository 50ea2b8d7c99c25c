from loguru import logger
from sqlalchemy.orm import Session

from app.config import settings
from app.core.authorizer import can_manage
from app.core.hierarchy import HierarchyGraph, HierarchyNode, HierarchyStats
from app.core.hierarchy_validator import validate_reassignment
from app.core.policy import (
    apply_template,
    can_modify_permissions,
    has_admin_permission,
    has_module_permission,
    policies_equal,
)
from app.core.role_catalog import RoleConfig, role_configs
from app.core.exceptions import ForbiddenException, NotFoundException
from app.models.member import Member
from app.models.role import AdminPermission, AppModule, PermissionAction
from app.models.team_context import TeamContext
from app.models.team_member import TeamMember
from app.repositories.team_member_repository import TeamMemberRepository
from app.schemas.team_schemas import (
    ManagerReassignRequest,
    MemberPatch,
    PermissionsUpdate,
)


class TeamService:
    """Service layer for team hierarchy and permission management"""

    def __init__(self, db: Session):
        self.db = db
        self.member_repo = TeamMemberRepository(db)

    def build_graph(self, tenant_id: int) -> HierarchyGraph:
        """
        Build a hierarchy from a freshly fetched member snapshot.

        Never reuse a graph across a write; call this again afterwards.

        Raises:
            MissingRootError: If REQUIRE_CEO_ROOT is set and the tenant has no CEO
        """
        records = self.member_repo.list_members(tenant_id)
        return HierarchyGraph.build(
            (Member.from_record(record) for record in records),
            require_root=settings.REQUIRE_CEO_ROOT,
        )

    def list_members(self, context: TeamContext) -> list[TeamMember]:
        """List every member of the current tenant"""
        return self.member_repo.list_members(context.tenant.id)

    def get_member(self, member_id: int, context: TeamContext) -> TeamMember:
        """
        Get a member of the current tenant.

        Raises:
            NotFoundException: If member not found in this tenant
        """
        record = self.member_repo.get_member(member_id, context.tenant.id)
        if not record:
            raise NotFoundException("Member not found in this tenant")
        return record

    def get_member_detail(self, member_id: int, context: TeamContext) -> dict:
        """
        Member details enriched with hierarchy position.

        Returns:
            Member fields plus depth, ancestor ids (root first, excluding the
            member) and direct report ids in display order
        """
        record = self.get_member(member_id, context)
        graph = self.build_graph(context.tenant.id)
        key = str(record.id)
        path = graph.ancestor_path(key)

        return {
            "id": record.id,
            "user_id": record.user_id,
            "full_name": record.full_name,
            "email": record.email,
            "role": record.role,
            "department": record.department,
            "manager_id": record.manager_id,
            "status": record.status,
            "permissions": record.permissions,
            "hire_date": record.hire_date,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
            "depth": len(path) - 1,
            "ancestor_ids": [int(m.id) for m in path[:-1]],
            "direct_report_ids": [int(m.id) for m in graph.children(key)],
        }

    def get_org_chart(self, context: TeamContext) -> dict:
        """Org chart rooted at the tenant's CEO"""
        graph = self.build_graph(context.tenant.id)
        if graph.is_degenerate:
            logger.warning(
                f"Tenant {context.tenant.id} hierarchy is degenerate: "
                f"{len(graph.roots)} roots, {len(graph.ceos)} CEOs"
            )
        chart = graph.org_chart()
        return {
            "root": self._node_to_dict(chart) if chart else None,
            "is_degenerate": graph.is_degenerate,
        }

    def get_stats(self, context: TeamContext) -> HierarchyStats:
        return self.build_graph(context.tenant.id).stats()

    def reassign_manager(
        self, member_id: int, request: ManagerReassignRequest, context: TeamContext
    ) -> TeamMember:
        """
        Move a member under a new manager (requires manage_users).

        Args:
            member_id: Member to move
            request: New manager ID
            context: Team context

        Returns:
            Updated member

        Raises:
            NotFoundException: If the member is not in this tenant
            ForbiddenException: If the actor lacks authority over the member
            StructuralError: If the edit breaks a hierarchy rule
        """
        record = self.get_member(member_id, context)
        graph = self.build_graph(context.tenant.id)
        actor = context.member
        target = graph.get(str(record.id))

        if not has_admin_permission(actor, AdminPermission.MANAGE_USERS):
            logger.warning(f"Member {actor.id} tried to reassign {target.id} without manage_users")
            raise ForbiddenException("Managing users is not allowed for your role")
        self._ensure_can_manage(actor, target, graph)

        validate_reassignment(target.id, str(request.manager_id), graph)

        updated = self.member_repo.update_member(
            record, MemberPatch(manager_id=request.manager_id)
        )

        refreshed = self.build_graph(context.tenant.id)
        logger.info(
            f"Member {updated.id} now reports to {updated.manager_id} "
            f"(depth {refreshed.depth(str(updated.id))}) by {actor.id}"
        )
        return updated

    def update_permissions(
        self, member_id: int, update: PermissionsUpdate, context: TeamContext
    ) -> TeamMember:
        """
        Replace a member's policy (requires manage_permissions).

        An update equal to the stored policy is not written.

        Raises:
            NotFoundException: If the member is not in this tenant
            ForbiddenException: If the actor may not edit this member's policy
        """
        record, target = self._authorize_policy_edit(member_id, context)

        if policies_equal(target.policy, update.permissions):
            logger.debug(f"Policy of member {record.id} unchanged, skipping write")
            return record

        updated = self.member_repo.update_member(
            record, MemberPatch(permissions=update.permissions)
        )
        logger.info(f"Policy of member {updated.id} replaced by {context.record.id}")
        return updated

    def reset_permissions(self, member_id: int, context: TeamContext) -> TeamMember:
        """
        Overwrite a member's policy with their role template.

        Custom grants are discarded, not merged.
        """
        record, target = self._authorize_policy_edit(member_id, context)
        updated = self.member_repo.update_member(
            record, MemberPatch(permissions=apply_template(target.role))
        )
        logger.info(
            f"Policy of member {updated.id} reset to {target.role.value} template "
            f"by {context.record.id}"
        )
        return updated

    def check_permission(
        self, module: AppModule, action: PermissionAction, context: TeamContext
    ) -> bool:
        return has_module_permission(context.member, module, action)

    def list_roles(self) -> list[RoleConfig]:
        return role_configs()

    def _authorize_policy_edit(
        self, member_id: int, context: TeamContext
    ) -> tuple[TeamMember, Member]:
        record = self.get_member(member_id, context)
        actor = context.member

        if not can_modify_permissions(actor):
            logger.warning(f"Member {actor.id} tried to edit policy of {record.id}")
            raise ForbiddenException("Managing permissions is not allowed for your role")

        graph = self.build_graph(context.tenant.id)
        target = graph.get(str(record.id))
        self._ensure_can_manage(actor, target, graph)
        return record, target

    def _ensure_can_manage(self, actor: Member, target: Member, graph: HierarchyGraph) -> None:
        if not can_manage(actor, target, graph, transitive=settings.transitive_management):
            logger.warning(f"Member {actor.id} has no authority over member {target.id}")
            raise ForbiddenException("You cannot manage this member")

    def _node_to_dict(self, node: HierarchyNode) -> dict:
        member = node.member
        return {
            "id": int(member.id),
            "full_name": member.full_name,
            "role": member.role,
            "department": member.department,
            "status": member.status,
            "children": [self._node_to_dict(child) for child in node.children],
        }
