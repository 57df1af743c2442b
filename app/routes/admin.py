from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging
import re
from app.database import get_db
from app.models.user import User, Role
from app.schemas.common import MessageResponse
from app.schemas.user import AdminUser, UpdatePasswordRequest, UpdateRoleRequest, UserListResponse
from app.core.dependencies import CurrentUser, require_admin
from app.core.errors import (
    ApiError,
    CannotDeleteSelf,
    InvalidId,
    InvalidPassword,
    InvalidRole,
    NotFound,
    StoreFailure,
)
from app.core.security import hash_password

# Every admin route requires an ADMIN token
router = APIRouter(dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
USER_ID_PATTERN = re.compile(r"[0-9]+")
# users.id is a 32-bit signed INTEGER column
MAX_USER_ID = 2**31 - 1


def parse_user_id(user_id: str) -> int:
    if not USER_ID_PATTERN.fullmatch(user_id):
        raise InvalidId("User ID must be a number")
    return int(user_id)


def get_user_or_404(db: Session, user_id: int) -> User:
    if user_id > MAX_USER_ID:
        # No such row can exist, and the column type would reject the query
        raise NotFound("User with specified ID does not exist")
    db_user = db.query(User).filter(User.id == user_id).first()
    if db_user is None:
        raise NotFound("User with specified ID does not exist")
    return db_user


@router.get("/users", response_model=UserListResponse)
def get_users(db: Session = Depends(get_db)):
    """Get all users, newest first - requires admin role"""
    try:
        users = db.query(User).order_by(User.created_at.desc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching users: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to fetch users. Please try again later.")

    return UserListResponse(users=[AdminUser.model_validate(user) for user in users])


@router.put("/users/{user_id}/role", response_model=MessageResponse)
def update_user_role(
    user_id: str,
    role_update: UpdateRoleRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Change the role of a user - requires admin role"""
    target_id = parse_user_id(user_id)
    try:
        new_role = Role(role_update.role)
    except ValueError:
        raise InvalidRole()

    try:
        db_user = get_user_or_404(db, target_id)
        db_user.role = new_role
        db.commit()
    except ApiError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating role of user {target_id}: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to update user role. Please try again later.")

    logger.info(f"Admin {current_user.id} set role of user {target_id} to {new_role.value}")
    return MessageResponse(message="User role updated successfully")


@router.put("/users/{user_id}/password", response_model=MessageResponse)
def update_user_password(
    user_id: str,
    password_update: UpdatePasswordRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Set a new password for a user - requires admin role"""
    target_id = parse_user_id(user_id)
    password = password_update.password
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidPassword(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    try:
        db_user = get_user_or_404(db, target_id)
        db_user.hashed_password = hash_password(password)
        db.commit()
    except ApiError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating password of user {target_id}: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to update user password. Please try again later.")

    logger.info(f"Admin {current_user.id} reset the password of user {target_id}")
    return MessageResponse(message="User password updated successfully")


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Delete a user and their trips - requires admin role"""
    target_id = parse_user_id(user_id)
    try:
        db_user = get_user_or_404(db, target_id)
        if target_id == current_user.id:
            raise CannotDeleteSelf()

        db.delete(db_user)
        db.commit()
    except ApiError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting user {target_id}: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to delete user. Please try again later.")

    logger.info(f"Admin {current_user.id} deleted user {target_id}")
    return MessageResponse(message="User deleted successfully")
