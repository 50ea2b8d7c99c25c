from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.core.security import decode_jwt, extract_tenant_id
from app.core.exceptions import UnauthorizedException, ForbiddenException, NotFoundException
from app.database import get_db
from app.repositories.user_repository import UserRepository
from app.repositories.tenant_repository import TenantRepository
from app.repositories.team_member_repository import TeamMemberRepository
from app.models.team_context import TeamContext

security = HTTPBearer()


def _decode(credentials: HTTPAuthorizationCredentials) -> dict:
    try:
        return decode_jwt(credentials.credentials)
    except UnauthorizedException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )



async def get_team_context(
    credentials: HTTPAuthorizationCredentials = Depends(security), db: Session = Depends(get_db)
) -> TeamContext:
    """
    FastAPI dependency resolving who is acting, and where.

    Flow:
    1. Validate JWT and read 'sub' and 'tenant_id' claims
    2. Load the tenant
    3. Load the user's team member record inside that tenant

    Raises:
        HTTPException 401: If token invalid, expired or missing tenant_id
        NotFoundException: If the tenant does not exist
        ForbiddenException: If the user has no position in the tenant
    """
    payload = _decode(credentials)
    try:
        tenant_id = extract_tenant_id(payload)
    except UnauthorizedException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = UserRepository(db).get_or_create_by_auth_id(payload["sub"])

    tenant = TenantRepository(db).get_by_id(tenant_id)
    if not tenant:
        raise NotFoundException("Tenant not found")

    record = TeamMemberRepository(db).get_by_user(user.id, tenant.id)
    if not record:
        raise ForbiddenException("You are not a member of this tenant")

    return TeamContext(user=user, tenant=tenant, record=record)
