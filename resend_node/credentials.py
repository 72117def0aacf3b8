"""
Credential resolution for the Resend API.

Credentials are looked up by name (``resendApi``) and the API key is
resolved once per top-level invocation, then passed down explicitly.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from .base import ResendAuthError, ResendConfig

logger = logging.getLogger(__name__)

CREDENTIAL_NAME = "resendApi"


@runtime_checkable
class CredentialSource(Protocol):
    """Anything that can hand out a named credential record."""

    async def get_credentials(self, name: str) -> Dict[str, Any]:
        ...


class EnvCredentialSource:
    """Serve the ``resendApi`` credential from a loaded ResendConfig."""

    def __init__(self, config: ResendConfig):
        self._config = config

    async def get_credentials(self, name: str) -> Dict[str, Any]:
        if name != CREDENTIAL_NAME:
            return {}
        return {"apiKey": self._config.api_key or ""}


class StaticCredentialSource:
    """Serve credentials from an in-memory mapping keyed by credential name."""

    def __init__(self, credentials: Mapping[str, Dict[str, Any]]):
        self._credentials = dict(credentials)

    async def get_credentials(self, name: str) -> Dict[str, Any]:
        return dict(self._credentials.get(name, {}))


async def resolve_api_key(source: CredentialSource, name: str = CREDENTIAL_NAME) -> str:
    """
    Resolve the API key for a credential.

    Raises:
        ResendAuthError: If the credential carries no usable ``apiKey``
    """
    credentials = await source.get_credentials(name)
    api_key: Optional[str] = credentials.get("apiKey")
    if not isinstance(api_key, str) or not api_key.strip():
        raise ResendAuthError(f"Resend API key not configured (credentials.{name}.apiKey)")
    logger.debug(f"Resolved API key for credential {name}")
    return api_key.strip()
