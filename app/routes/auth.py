from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional
import logging
from app.database import get_db
from app.models.user import User, Role
from app.schemas.common import MessageResponse
from app.schemas.user import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserPublic
from app.core.dependencies import CurrentUser, get_optional_user
from app.core.errors import ApiError, Conflict, InvalidCredentials, MissingFields, StoreFailure
from app.core.security import create_access_token, dummy_verify_password, hash_password, verify_password

router = APIRouter()
logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate with email and password and receive an access token"""
    if not credentials.email or not credentials.password:
        raise MissingFields("Email and password are required")

    email = normalize_email(credentials.email)
    try:
        db_user = db.query(User).filter(User.email == email).first()
    except SQLAlchemyError as e:
        logger.error(f"Database error during login: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to process login. Please try again later.")

    # Same answer, and roughly the same time, for unknown email and wrong password
    if db_user is None:
        dummy_verify_password()
    if not db_user or not verify_password(credentials.password, db_user.hashed_password):
        logger.info(f"Failed login attempt for {email}")
        raise InvalidCredentials()

    token = create_access_token(db_user.id, db_user.email, db_user.role)
    logger.info(f"User {db_user.id} logged in")
    return LoginResponse(token=token, user=UserPublic.model_validate(db_user))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """Create a new USER account. Does not log the user in."""
    if not user_data.email or not user_data.name or not user_data.surname or not user_data.password:
        raise MissingFields("Email, name, surname and password are required")

    email = normalize_email(user_data.email)
    try:
        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            raise Conflict("An account with this email already exists")

        db_user = User(
            email=email,
            name=user_data.name.strip(),
            surname=user_data.surname.strip(),
            hashed_password=hash_password(user_data.password),
            role=Role.USER,
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)

        logger.info(f"Registered user {db_user.id}")
        return RegisterResponse(
            message="Account created successfully",
            user=UserPublic.model_validate(db_user),
        )
    except ApiError:
        raise
    except IntegrityError as e:
        # Concurrent registration with the same email
        db.rollback()
        logger.warning(f"Integrity error while registering {email}: {str(e)}")
        raise Conflict("An account with this email already exists")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Registration error: {str(e)}", exc_info=True)
        raise StoreFailure("Unable to create account. Please try again later.")


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: Optional[CurrentUser] = Depends(get_optional_user)):
    """Tokens are stateless, so logging out is done client-side by dropping the token."""
    if current_user:
        logger.info(f"User {current_user.id} logged out")
    return MessageResponse(message="Logged out successfully")
