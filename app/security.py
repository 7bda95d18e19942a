import logging

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.exceptions.custom import AuthenticationError
from app.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def decode_access_token(token: str, secret: str, audience: str | None = "authenticated") -> TokenClaims:
    """Verify a Supabase-issued access token and return its claims."""
    options = {"verify_aud": audience is not None}
    try:
        payload = jwt.decode(
            token, secret, algorithms=[ALGORITHM], audience=audience, options=options,
        )
    except ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except JWTError as exc:
        logger.warning("JWT verification failed: %s", exc)
        raise AuthenticationError("Invalid token")

    try:
        return TokenClaims(**payload)
    except ValidationError:
        raise AuthenticationError("Invalid token")
