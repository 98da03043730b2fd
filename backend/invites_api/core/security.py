from typing import Any

from itsdangerous import BadSignature, URLSafeTimedSerializer

from invites_api.core.config import get_settings

settings = get_settings()


class CallerTokenSigner:
    """Signs and verifies the identity claims issued to a caller.

    Tokens carry the subject id under ``sub`` plus optional ``name`` and
    ``email`` claims. Verification returns ``None`` for tampered or expired
    tokens rather than raising.
    """

    def __init__(self) -> None:
        self._serializer = URLSafeTimedSerializer(
            secret_key=settings.session_secret, salt=settings.caller_token_salt
        )

    def sign(self, claims: dict[str, Any]) -> str:
        return self._serializer.dumps(claims)

    def unsign(
        self, token: str, max_age_seconds: int = settings.caller_token_max_age_seconds
    ) -> dict[str, Any] | None:
        try:
            payload = self._serializer.loads(token, max_age=max_age_seconds)
        except BadSignature:
            return None
        if not isinstance(payload, dict):
            return None
        return payload
