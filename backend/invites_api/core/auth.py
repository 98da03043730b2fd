from dataclasses import dataclass, field
from typing import Any

from fastapi import Header, Request

from invites_api.core.config import get_settings
from invites_api.core.security import CallerTokenSigner

settings = get_settings()


@dataclass
class CallerIdentity:
    uid: str
    name: str | None = None
    email: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)


caller_signer = CallerTokenSigner()


def issue_caller_token(uid: str, name: str | None = None, email: str | None = None) -> str:
    claims: dict[str, Any] = {"sub": uid}
    if name:
        claims["name"] = name
    if email:
        claims["email"] = email
    return caller_signer.sign(claims)


def _optional_claim(claims: dict[str, Any], key: str) -> str | None:
    value = claims.get(key)
    return value if isinstance(value, str) and value else None


def _identity_from_token(token: str) -> CallerIdentity | None:
    claims = caller_signer.unsign(token)
    if claims is None:
        return None
    uid = claims.get("sub")
    if not isinstance(uid, str) or not uid.strip():
        return None
    return CallerIdentity(
        uid=uid,
        name=_optional_claim(claims, "name"),
        email=_optional_claim(claims, "email"),
        claims=claims,
    )


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_caller(
    request: Request,
    authorization: str | None = Header(default=None),
    x_dev_user_id: str | None = Header(default=None),
    x_dev_user_name: str | None = Header(default=None),
    x_dev_user_email: str | None = Header(default=None),
) -> CallerIdentity | None:
    token = _bearer_token(authorization) or request.cookies.get("session_token")
    if token:
        caller = _identity_from_token(token)
        if caller:
            return caller

    if settings.dev_auth_enabled and x_dev_user_id and x_dev_user_id.strip():
        uid = x_dev_user_id.strip()
        claims: dict[str, Any] = {"sub": uid}
        if x_dev_user_name:
            claims["name"] = x_dev_user_name
        if x_dev_user_email:
            claims["email"] = x_dev_user_email
        return CallerIdentity(uid=uid, name=x_dev_user_name or None, email=x_dev_user_email or None, claims=claims)

    return None
