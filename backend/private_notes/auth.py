"""
Private Notes Backend — Authentication Gate
============================================

What:  FastAPI dependency that resolves the caller's Identity from the
       `Authorization: Bearer <token>` header.
How:   Extracts the token, asks the IdentityVerifier, stores the result on
       `request.state.identity` and returns it to the route.
Who:   Every /api/notes route depends on `get_current_identity`.

Outcomes:
    header missing / not "Bearer <token>"      → 401 "Missing or invalid authorization header"
    verifier returns None or reports an error  → 401 "Invalid or expired token"
    any other verifier failure                 → 401 "Authentication failed" (logged)

No exception from the verifier ever reaches the client as a 500.
"""

import logging
from typing import Optional

from fastapi import Depends, Request

from private_notes.exceptions import IdentityVerificationError, UnauthenticatedError
from private_notes.schemas.note import Identity
from private_notes.services.identity import IdentityVerifier, get_identity_verifier

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a `Bearer <token>` header value, or None."""
    if not authorization:
        return None

    scheme, sep, token = authorization.partition(" ")
    if not sep or scheme.lower() != "bearer":
        return None

    # exactly one space, then a token with no whitespace in it
    if not token or token.split() != [token]:
        return None

    return token


async def get_current_identity(
    request: Request,
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Identity:
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise UnauthenticatedError(message="Missing or invalid authorization header")

    try:
        identity = await verifier.verify(token)
    except IdentityVerificationError as e:
        logger.warning("Token verification error: %s", e.message)
        raise UnauthenticatedError(message="Invalid or expired token")
    except Exception as e:
        logger.error("Authentication error: %s", str(e), exc_info=True)
        raise UnauthenticatedError(message="Authentication failed")

    if identity is None:
        raise UnauthenticatedError(message="Invalid or expired token")

    request.state.identity = identity
    return identity
