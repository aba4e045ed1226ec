"""
Bearer Credential Extraction

Reads the raw credential from the Authorization header. Validation is
left to the use cases so that a missing credential and an invalid one
produce distinct errors.
"""

from typing import Optional

from fastapi import Header

BEARER_PREFIX = "bearer "


def parse_bearer_credential(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the credential from an Authorization header value.

    Returns None when the header is absent or carries no credential.
    A value without the Bearer scheme is passed through as-is.
    """
    if authorization is None:
        return None

    value = authorization.strip()
    if value.lower().startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):].strip()
    elif value.lower() == BEARER_PREFIX.strip():
        value = ""

    return value or None


async def get_bearer_credential(
    authorization: Optional[str] = Header(None),
) -> Optional[str]:
    return parse_bearer_credential(authorization)
