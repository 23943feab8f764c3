"""
Password hashing and session-based request authentication.

The session cookie (Starlette's SessionMiddleware) carries only the user id;
the user row is loaded fresh on every request.
"""
import hashlib
import hmac
import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from . import storage
from .database import get_db
from .models import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"
_SCRYPT_PARAMS = {"n": 16384, "r": 8, "p": 1, "dklen": 64}


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.scrypt(password.encode("utf-8"), salt=salt.encode("utf-8"), **_SCRYPT_PARAMS)
    return f"{digest.hex()}.{salt}"


def verify_password(supplied: str, stored: Optional[str]) -> bool:
    if not stored or "." not in stored:
        return False
    hashed, salt = stored.split(".", 1)
    if not hashed or not salt:
        return False
    supplied_digest = hashlib.scrypt(supplied.encode("utf-8"), salt=salt.encode("utf-8"), **_SCRYPT_PARAMS)
    return hmac.compare_digest(bytes.fromhex(hashed), supplied_digest)


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    logger.info("Login attempt for username: %s", username)
    user = storage.get_user_by_username(db, username)
    if not user:
        logger.info("User not found: %s", username)
        return None
    if not verify_password(password, user.password):
        logger.info("Password rejected for username: %s", username)
        return None
    return user


def login_session(request: Request, user: User) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id


def logout_session(request: Request) -> None:
    request.session.clear()


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None
    user = storage.get_user(db, user_id)
    if not user:
        logger.info("Session refers to missing user %s", user_id)
        request.session.clear()
    return user


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_role(*roles: str):
    """Dependency factory: the caller must be logged in with one of ``roles``."""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise HTTPException(status_code=401, detail="Not authorized")
        return user

    return dependency


DEMO_USERS = [
    {
        "username": "testuser",
        "password": "password123",
        "email": "user@example.com",
        "role": "seeker",
        "job_preferences": {
            "titles": ["Software Engineer", "Full Stack Developer"],
            "locations": ["Remote", "New York"],
        },
    },
    {
        "username": "agency1",
        "password": "agency123",
        "email": "agency@example.com",
        "role": "agency",
        "company_name": "Tech Recruiters Inc",
        "company_logo": "https://example.com/logo.png",
        "company_description": "Leading tech recruitment agency",
    },
    {
        "username": "admin",
        "password": "admin123",
        "email": "admin@example.com",
        "role": "admin",
    },
]


def seed_demo_users(db: Session) -> int:
    created = 0
    for account in DEMO_USERS:
        if storage.get_user_by_username(db, account["username"]):
            continue
        fields = dict(account)
        fields["password"] = hash_password(fields["password"])
        storage.create_user(db, **fields)
        created += 1
    if created:
        logger.info("Seeded %d demo accounts", created)
    return created
