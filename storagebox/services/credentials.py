import logging
import re
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storagebox.core.exceptions import AuthenticationError, DuplicateError, ValidationError
from storagebox.core.security import hash_password, verify_password
from storagebox.models.user import User

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def create_user(db: Session, name: Optional[str], email: Optional[str], password: Optional[str]) -> User:
    """Register a new user with a hashed password.

    Raises ValidationError for missing fields or a malformed email and
    DuplicateError when the email is taken.
    """
    name = (name or "").strip()
    email = normalize_email(email)
    if not name or not email or not password:
        raise ValidationError("required all fields")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("invalid email address")

    if find_user_by_email(db, email):
        raise DuplicateError()

    user = User(name=name, email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # a concurrent registration won the unique index
        db.rollback()
        raise DuplicateError() from exc
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user


def find_user_by_email(db: Session, email: Optional[str]) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def find_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def authenticate(db: Session, email: Optional[str], password: Optional[str]) -> User:
    if not email or not password:
        raise ValidationError("type the required fields")

    user = find_user_by_email(db, email)
    # same error for unknown email and wrong password
    if not user or not verify_password(user.password_hash, password):
        raise AuthenticationError()
    return user
