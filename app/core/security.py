from jose import JWTError, jwt
from app.config import settings
from app.core.exceptions import UnauthorizedException


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using shared SECRET_KEY.

    Identity is established upstream; this only checks the signature and
    the claims the team API relies on.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub' (user_id), 'exp', optional 'tenant_id'

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")

    if payload.get("exp") is None:
        raise UnauthorizedException("Token missing expiration")

    if payload.get("sub") is None:
        raise UnauthorizedException("Token missing user identifier")

    return payload


def extract_user_id(token: str) -> str:
    """Extract auth_user_id from JWT token"""
    payload = decode_jwt(token)
    return payload["sub"]


def extract_tenant_id(payload: dict) -> int:
    """
    Read the tenant the token was issued for.

    Raises:
        UnauthorizedException: If the claim is missing or not an integer
    """
    tenant_id = payload.get("tenant_id")
    if tenant_id is None:
        raise UnauthorizedException("Token missing tenant identifier")
    try:
        return int(tenant_id)
    except (TypeError, ValueError):
        raise UnauthorizedException("Token has malformed tenant identifier")
