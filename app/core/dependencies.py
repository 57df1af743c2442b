import re
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from app.core.errors import ApiError, Forbidden, NotAuthenticated
from app.core.security import verify_access_token
from app.models.user import Role

# auto_error=False so a missing header reaches us and we answer with our own error body
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Identity attached to an authenticated request."""
    id: int
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Dependency for routes that require authentication.
    Validates the bearer token and returns the identity from its claims.
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthenticated("Your session has expired. Please log in again.")

    claims = verify_access_token(credentials.credentials)
    return CurrentUser(id=claims.id, email=claims.email, role=claims.role)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CurrentUser]:
    """
    Dependency for routes where authentication is optional.
    A missing, invalid or expired token yields an anonymous request.
    """
    if credentials is None or not credentials.credentials:
        return None
    try:
        claims = verify_access_token(credentials.credentials)
    except ApiError:
        return None
    return CurrentUser(id=claims.id, email=claims.email, role=claims.role)


def require_admin(current_user: Optional[CurrentUser] = Depends(get_current_user)) -> CurrentUser:
    """Dependency that only lets ADMIN users through."""
    if current_user is None:
        raise NotAuthenticated()
    if not current_user.is_admin:
        raise Forbidden("Administrator privileges required")
    return current_user


def require_owner_or_admin(user_id_param: str = "id"):
    """
    Dependency factory for endpoints where users may act on their own data
    and admins on anyone's.
    Usage: Depends(require_owner_or_admin("user_id"))
    """
    def owner_checker(
        request: Request,
        current_user: Optional[CurrentUser] = Depends(get_current_user),
    ) -> CurrentUser:
        if current_user is None:
            raise NotAuthenticated()

        raw_target = str(request.path_params.get(user_id_param, ""))
        is_owner = re.fullmatch(r"[0-9]+", raw_target) is not None and int(raw_target) == current_user.id
        if not is_owner and not current_user.is_admin:
            raise Forbidden("You can only modify your own data")
        return current_user
    return owner_checker
