"""Caller identity from the x-rh-identity header"""
import base64
import binascii
import json
import logging
import sys
from typing import Optional
from fastapi import Depends, Header
from pydantic import BaseModel, Field, ValidationError

from .errors import InvalidIdentityError

logger = logging.getLogger(__name__)

IDENTITY_HEADER = "x-rh-identity"


class IdentityUser(BaseModel):
    """User section of an identity"""
    user_id: str = ""
    username: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class Identity(BaseModel):
    """Identity body"""
    account_number: Optional[str] = None
    org_id: Optional[str] = None
    type: str = "User"
    user: IdentityUser = Field(default_factory=IdentityUser)


class XRHIdentity(BaseModel):
    """Decoded x-rh-identity header"""
    identity: Identity


def decode_identity(header_value: str) -> XRHIdentity:
    """
    Decode a base64 encoded JSON identity.

    Raises:
        InvalidIdentityError: if the value cannot be decoded or has no user ID
    """
    try:
        payload = base64.b64decode(header_value, validate=True)
        decoded = XRHIdentity.model_validate(json.loads(payload))
    except (binascii.Error, ValueError, ValidationError) as e:
        raise InvalidIdentityError(f"cannot decode identity: {e}") from e
    if not decoded.identity.user.user_id:
        raise InvalidIdentityError("identity has no user ID")
    return decoded


def encode_identity(
    user_id: str,
    account_number: str = "1234567890",
    org_id: str = "12345",
    username: str = "jdoe",
) -> str:
    """Build an x-rh-identity header value for a user"""
    identity = XRHIdentity(identity=Identity(
        account_number=account_number,
        org_id=org_id,
        user=IdentityUser(user_id=user_id, username=username, first_name="John", last_name="Doe"),
    ))
    return base64.b64encode(identity.model_dump_json().encode("utf-8")).decode("ascii")


def get_user_identity(
    x_rh_identity: Optional[str] = Header(None, alias=IDENTITY_HEADER)
) -> XRHIdentity:
    """Decoded identity of the caller (FastAPI dependency)"""
    if not x_rh_identity:
        logger.error("Identity header missing")
        raise InvalidIdentityError("identity header missing")
    try:
        return decode_identity(x_rh_identity)
    except InvalidIdentityError as e:
        logger.error(f"Failed to decode identity: {e}")
        raise


def get_user_id(identity: XRHIdentity = Depends(get_user_identity)) -> str:
    """User ID of the caller (FastAPI dependency)"""
    return identity.identity.user.user_id


if __name__ == "__main__":
    # dev helper: python -m app.identity [user-id]
    print(encode_identity(sys.argv[1] if len(sys.argv) > 1 else "user-123"))
