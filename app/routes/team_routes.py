from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_team_context
from app.models.role import AppModule, PermissionAction
from app.models.team_context import TeamContext
from app.services.team_service import TeamService
from app.schemas.team_schemas import (
    HierarchyResponse,
    HierarchyStatsResponse,
    ManagerReassignRequest,
    MemberDetailResponse,
    MemberResponse,
    PermissionCheckResponse,
    PermissionsUpdate,
    RoleConfigResponse,
)

router = APIRouter()


@router.get("/roles", response_model=list[RoleConfigResponse])
async def list_roles(
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """
    Role catalog ordered from most to least senior.

    Each entry carries the rank, display label and default policy template.
    """
    service = TeamService(db)
    return service.list_roles()


@router.get("/members", response_model=list[MemberResponse])
async def list_members(
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """List all members of the current tenant"""
    service = TeamService(db)
    return service.list_members(context)


@router.get("/members/{member_id}", response_model=MemberDetailResponse)
async def get_member(
    member_id: int,
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """Member details with depth, manager chain and direct reports"""
    service = TeamService(db)
    return service.get_member_detail(member_id, context)


@router.get("/hierarchy", response_model=HierarchyResponse)
async def get_hierarchy(
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """
    Org chart of the current tenant.

    Children are ordered by rank, then name. `root` is null when the tenant
    has no single CEO.
    """
    service = TeamService(db)
    return service.get_org_chart(context)


@router.get("/hierarchy/stats", response_model=HierarchyStatsResponse)
async def get_hierarchy_stats(
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """Member counts and active-member distribution by depth"""
    service = TeamService(db)
    return service.get_stats(context)


@router.patch("/members/{member_id}/manager", response_model=MemberResponse)
async def reassign_manager(
    member_id: int,
    request: ManagerReassignRequest,
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """
    Move a member under a new manager.

    - **Requires manage_users** and authority over the member
    - Manager must strictly outrank the member
    - Manager cannot be the member or one of their reports
    """
    service = TeamService(db)
    return service.reassign_manager(member_id, request, context)


@router.put("/members/{member_id}/permissions", response_model=MemberResponse)
async def update_permissions(
    member_id: int,
    update: PermissionsUpdate,
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """
    Replace a member's permission policy.

    - **Requires manage_permissions** and authority over the member
    """
    service = TeamService(db)
    return service.update_permissions(member_id, update, context)


@router.post("/members/{member_id}/permissions/reset", response_model=MemberResponse)
async def reset_permissions(
    member_id: int,
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """
    Reset a member's policy to their role template.

    - **Requires manage_permissions** and authority over the member
    - Custom grants are discarded
    """
    service = TeamService(db)
    return service.reset_permissions(member_id, context)


@router.get("/me/permissions/check", response_model=PermissionCheckResponse)
async def check_permission(
    module: AppModule = Query(...),
    action: PermissionAction = Query(...),
    context: TeamContext = Depends(get_team_context),
    db: Session = Depends(get_db),
):
    """Whether the authenticated member may perform an action on a module"""
    service = TeamService(db)
    return {
        "module": module,
        "action": action,
        "allowed": service.check_permission(module, action, context),
    }
