"""Registration, login and bearer-token authorization."""

import logging

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sweetshop.auth import jwt_handler
from sweetshop.auth.passwords import hash_password, verify_password
from sweetshop.core.errors import DuplicateEmail, InvalidCredential, InvalidCredentials, NotFound
from sweetshop.models.user import User
from sweetshop.schemas.user import CurrentUser, UserResponse, UserRole

logger = logging.getLogger(__name__)


def _issue_token(user: User) -> str:
    return jwt_handler.create_access_token(subject=str(user.id))


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: UserRole | str | None = None,
) -> tuple[str, UserResponse]:
    """Create an account and return a fresh token with the public user fields.

    Raises DuplicateEmail when the address is already registered.
    """
    normalized_email = email.strip().lower()
    if find_user_by_email(db, normalized_email) is not None:
        raise DuplicateEmail()

    user = User(
        name=name,
        email=normalized_email,
        hashed_password=hash_password(password),
        role=UserRole(role or UserRole.USER).value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEmail() from exc
    db.refresh(user)

    logger.info('Registered user %s with role %s', user.id, user.role)
    return _issue_token(user), UserResponse.model_validate(user)


def login_user(db: Session, email: str, password: str) -> tuple[str, UserResponse]:
    """Check credentials and issue a token.

    Unknown email and wrong password raise the same InvalidCredentials error.
    """
    user = find_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning('Failed login attempt')
        raise InvalidCredentials()

    return _issue_token(user), UserResponse.model_validate(user)


def authorize(db: Session, token: str) -> CurrentUser:
    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise InvalidCredential() from exc

    subject = payload.get('sub')
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise InvalidCredential() from exc

    user = db.get(User, user_id)
    if user is None:
        raise NotFound('User not found')
    return CurrentUser.model_validate(user)
