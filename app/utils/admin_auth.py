from fastapi import Depends
from fastapi_clerk_auth import ClerkConfig, ClerkHTTPBearer, HTTPAuthorizationCredentials
from app.configs.app_settings import settings
from app.custom_error import ValidationError, AuthorizationError
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# "clerk_auth_guard" runs first (as an instance of ClerkHTTPBearer) and:
# - reads the Authorization: Bearer <JWT> header
# - verifies the signature against the JWKS url from settings
# - hands back the decoded claims as HTTPAuthorizationCredentials
# the admin check below only looks at claims that already passed verification.

# a caller is an admin when its clerk user id (the "sub" claim) is in ADMIN_CLERK_USER_IDS,
# or when the session token template exposes public_metadata.role == "admin".

clerk_config = ClerkConfig(jwks_url=settings.CLERK_JWKS_URL)
clerk_auth_guard = ClerkHTTPBearer(config=clerk_config)


async def get_current_admin_user_id(credentials: Optional[HTTPAuthorizationCredentials] = Depends(clerk_auth_guard)) -> str:
    """Extract the clerk user ID from the JWT and make sure it belongs to an admin"""

    if not credentials:
        raise ValidationError("Authentication required")

    clerk_user_id = credentials.decoded.get("sub")
    if not clerk_user_id:
        raise ValidationError("Invalid token: user ID not found")

    public_metadata = credentials.decoded.get("public_metadata") or {}
    if clerk_user_id not in settings.ADMIN_CLERK_USER_IDS and public_metadata.get("role") != "admin":
        logger.warning(f"Non-admin user {clerk_user_id} tried to reach an admin endpoint")
        raise AuthorizationError()

    return clerk_user_id
