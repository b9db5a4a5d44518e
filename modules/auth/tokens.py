"""
Access token decoding.

Validates Supabase JWT tokens locally with the project JWT secret, so
reading the current session needs no round trip.
"""

import jwt

from shared.models import UserIdentity, UserMetadata
from .exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from .models import JWTPayload


def decode_access_token(token: str, secret: str) -> JWTPayload:
    """
    Decode and validate a Supabase access token.

    Raises:
        MissingTokenError: If no token or no secret is available
        ExpiredTokenError: If the token has expired
        InvalidTokenError: If the token is malformed or badly signed
    """
    if not token:
        raise MissingTokenError()
    if not secret:
        raise MissingTokenError("Server authentication not configured")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience="authenticated",
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(str(e))

    return JWTPayload(**payload)


def identity_from_payload(payload: JWTPayload) -> UserIdentity:
    """Build the mirrored identity from token claims."""
    return UserIdentity(
        id=payload.sub,
        email=payload.email or "",
        metadata=UserMetadata(**payload.user_metadata),
    )
