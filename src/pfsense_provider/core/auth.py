"""
pfSense Provider - Authentication Mode Resolution

Exactly one form of authentication may be configured per provider instance.
The mode is inferred from which settings are present:

- ``jwt_token`` selects JWT authentication
- ``user`` selects local authentication and requires ``password``
- ``api_client_id`` selects token authentication and requires ``api_client_token``

With no credentials the mode resolves to ``AuthMode.NONE`` and the pfSense API
decides whether anonymous access is acceptable.
"""

import logging
from dataclasses import dataclass

from .exceptions import AmbiguousAuthError, MissingCredentialError
from .models import AuthMode

logger = logging.getLogger("pfsense-provider")


@dataclass(frozen=True)
class ResolvedAuth:
    """Selected auth mode and the credentials belonging to it."""

    mode: AuthMode = AuthMode.NONE
    user: str | None = None
    password: str | None = None
    jwt_token: str | None = None
    api_client_id: str | None = None
    api_client_token: str | None = None

    def __repr__(self) -> str:
        return f"ResolvedAuth(mode={self.mode.value!r})"


def is_present(value) -> bool:
    """A setting is present when it is neither None nor an empty string."""
    return value is not None and value != ""


def resolve_auth(
    user: str | None = None,
    password: str | None = None,
    jwt_token: str | None = None,
    api_client_id: str | None = None,
    api_client_token: str | None = None,
) -> ResolvedAuth:
    """Derive the single authentication mode from the present settings.

    Raises:
        MissingCredentialError: If ``user`` is set without ``password`` or
            ``api_client_id`` without ``api_client_token``
        AmbiguousAuthError: If more than one form of authentication is set
    """
    candidates: list[ResolvedAuth] = []

    if is_present(jwt_token):
        candidates.append(ResolvedAuth(mode=AuthMode.JWT, jwt_token=jwt_token))

    if is_present(user):
        if not is_present(password):
            raise MissingCredentialError(
                "password is required when user is provided",
                context={"setting": "password", "required_by": "user"},
            )
        candidates.append(ResolvedAuth(mode=AuthMode.LOCAL, user=user, password=password))
    elif is_present(password):
        logger.warning("password is set without user and will be ignored")

    if is_present(api_client_id):
        if not is_present(api_client_token):
            raise MissingCredentialError(
                "api_client_token is required when api_client_id is provided",
                context={"setting": "api_client_token", "required_by": "api_client_id"},
            )
        candidates.append(
            ResolvedAuth(
                mode=AuthMode.TOKEN,
                api_client_id=api_client_id,
                api_client_token=api_client_token,
            )
        )
    elif is_present(api_client_token):
        logger.warning("api_client_token is set without api_client_id and will be ignored")

    if len(candidates) > 1:
        raise AmbiguousAuthError(
            "only one form of authentication should be provided",
            context={"modes": [c.mode.value for c in candidates]},
        )

    if not candidates:
        logger.debug("No authentication configured, requests will be anonymous")
        return ResolvedAuth()

    return candidates[0]
