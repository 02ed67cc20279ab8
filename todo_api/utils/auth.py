import logging
import secrets
from datetime import datetime, UTC
from typing import NamedTuple, Optional
from fastapi import Depends, Header, HTTPException
from jose import jwt, JWTError
from passlib.context import CryptContext
from pymongo.database import Database
from todo_api.database import get_db, parse_object_id
from todo_api.models import user as users
from todo_api.models.user import ACCESS_AUTH

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class Identity(NamedTuple):
    user: dict
    token: str


def hash_password(password: str):
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises ValueError if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if isinstance(password, str):
        b = password.encode("utf-8")
        if len(b) > 72:
            # make the failure explicit and consistent
            raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain, hashed):
    """Verify a plaintext password against a hash.

    If verification raises a ValueError (for example plain >72 bytes), return False
    to allow the caller to respond with a login failure instead of an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_token(user_id) -> str:
    # read the secret at call-time so tests (and runtime overrides) that modify
    # todo_api.config.SECRET_KEY take effect immediately
    import todo_api.config as _cfg
    data = {
        "_id": str(user_id),
        "access": ACCESS_AUTH,
        "iat": int(datetime.now(UTC).timestamp()),
        # two logins in the same second still get distinct tokens
        "jti": secrets.token_hex(8),
    }
    return jwt.encode(data, _cfg.SECRET_KEY, algorithm=_cfg.ALGORITHM)


def issue_token(db: Database, user_id) -> str:
    token = create_token(user_id)
    users.push_token(db, user_id, token)
    return token


def find_user_by_token(db: Database, token: Optional[str]) -> Optional[dict]:
    """Resolve a token to the user that holds it; None when nothing matches."""
    if not token:
        return None
    import todo_api.config as _cfg
    try:
        payload = jwt.decode(token, _cfg.SECRET_KEY, algorithms=[_cfg.ALGORITHM])
    except JWTError:
        return None
    user_id = parse_object_id(payload.get("_id"))
    if user_id is None or payload.get("access") != ACCESS_AUTH:
        return None
    return users.find_by_token(db, user_id, token)


def authenticate(x_auth: Optional[str] = Header(None), db: Database = Depends(get_db)) -> Identity:
    user = find_user_by_token(db, x_auth)
    if user is None:
        logger.warning("Rejected request with missing or unknown x-auth token")
        raise HTTPException(status_code=401, detail="Authentication required")
    return Identity(user=user, token=x_auth)
