"""Security helpers for hashing, HMAC checks and token generation."""

from datetime import datetime, timedelta, timezone
import hashlib
import hmac

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

# Ajusta "rounds" según tu presupuesto de CPU.
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)

SUBSCRIBER_TOKEN_AUDIENCE = "widget_user"
_ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def compute_subscriber_hmac(api_key: str, subscriber_id: str) -> str:
    """Return the hex HMAC-SHA256 of ``subscriber_id`` keyed by ``api_key``."""

    return hmac.new(api_key.encode(), subscriber_id.encode(), hashlib.sha256).hexdigest()


def verify_subscriber_hmac(api_key: str, subscriber_id: str, hmac_hash: str | None) -> bool:
    if not hmac_hash:
        return False
    expected = compute_subscriber_hmac(api_key, subscriber_id)
    return hmac.compare_digest(expected, hmac_hash)


# ---- JWT ----


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def create_subscriber_token(
    *,
    subscriber_internal_id: str,
    subscriber_id: str,
    organization_id: str,
    environment_id: str,
) -> str:
    """Issue the bearer token the embedded widget sends with every request."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.subscriber_token_expire_minutes
    )
    claims = {
        "sub": subscriber_internal_id,
        "aud": SUBSCRIBER_TOKEN_AUDIENCE,
        "subscriberId": subscriber_id,
        "organizationId": organization_id,
        "environmentId": environment_id,
        "exp": expire,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=_ALGORITHM)


def decode_subscriber_token(token: str) -> dict:
    try:
        claims = jwt.decode(
            token,
            get_settings().secret_key,
            algorithms=[_ALGORITHM],
            audience=SUBSCRIBER_TOKEN_AUDIENCE,
        )
    except JWTError as exc:
        raise ValueError("Could not validate subscriber credentials") from exc
    # python-jose accepts tokens without an ``aud`` claim when one is expected.
    if claims.get("aud") != SUBSCRIBER_TOKEN_AUDIENCE:
        raise ValueError("Could not validate subscriber credentials")
    return claims
