# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Authentication Service

Passwords are hashed with bcrypt. Each user carries one Role, validated
against the closed Role enumeration at creation time.
"""

import bcrypt
import re
from flask import current_app
from ..extensions import db
from ..models import Branch, User
from ..permissions import ConfigurationError, coerce_role
from ..time_utils import utcnow
from ..validation import ValidationError


class PasswordValidationError(Exception):
    """Raised when password doesn't meet strength requirements."""
    pass


def validate_password_strength(password: str) -> None:
    """
    Minimum 8 characters with at least one letter and one digit.

    Raises PasswordValidationError if requirements not met.
    """
    if len(password) < 8:
        raise PasswordValidationError("Password must be at least 8 characters long")

    if not re.search(r'[A-Za-z]', password):
        raise PasswordValidationError("Password must contain at least one letter")

    if not re.search(r'\d', password):
        raise PasswordValidationError("Password must contain at least one digit")


def hash_password(password: str) -> str:
    """Hash password using bcrypt (strength validated first). Cost from BCRYPT_ROUNDS."""
    validate_password_strength(password)
    salt = bcrypt.gensalt(rounds=current_app.config.get("BCRYPT_ROUNDS", 12))
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Timing-safe bcrypt comparison. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def create_user(
    username: str,
    email: str,
    password: str,
    role,
    full_name: str | None = None,
    phone: str | None = None,
    branch_id: int | None = None,
) -> User:
    """
    Create a user with exactly one role.

    Raises:
        ValidationError: unknown role, duplicate username/email, missing branch
        PasswordValidationError: weak password
    """
    try:
        role = coerce_role(role)
    except ConfigurationError as e:
        raise ValidationError(str(e)) from None

    existing = db.session.query(User).filter(
        db.or_(User.username == username, User.email == email)
    ).first()
    if existing:
        raise ValidationError("Username or email already exists")

    if branch_id is not None and db.session.get(Branch, branch_id) is None:
        raise ValidationError("Branch not found")

    user = User(
        username=username,
        email=email,
        full_name=full_name or username,
        phone=phone,
        password_hash=hash_password(password),
        role=role,
        branch_id=branch_id,
    )

    db.session.add(user)
    db.session.commit()
    return user


def authenticate(username: str, password: str) -> User | None:
    """
    Authenticate by username or email.

    Returns the active User on success (and stamps last_login_at), None otherwise.
    """
    user = db.session.query(User).filter(
        db.or_(User.username == username, User.email == username),
        User.is_active.is_(True),
    ).first()

    if not user or not verify_password(password, user.password_hash):
        return None

    user.last_login_at = utcnow()
    db.session.commit()
    return user
