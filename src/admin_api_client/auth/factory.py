"""Build an auth provider from connection settings.

Settings normally come from a credential store owned by the caller; for
scripts and CI they can also be read from the environment:

| Variable | Meaning |
|----------|---------|
| ``ADMIN_API_ADDRESS`` | Server address (``host``, ``https://host`` or ``http://host``) |
| ``ADMIN_API_USER`` | Basic-auth username |
| ``ADMIN_API_PASS`` | Basic-auth password |
| ``ADMIN_API_CLIENT_ID`` | OAuth2 client id |
| ``ADMIN_API_PRIVATE_KEY_FILE`` | Path to the OAuth2 PEM private key |
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from admin_api_client.api import base_url_from_address
from admin_api_client.auth.credentials import CredentialResolver
from admin_api_client.auth.exceptions import CredentialNotFoundError
from admin_api_client.auth.providers import AuthProvider, AuthToken, BasicAuth, NoAuth, OAuth2
from admin_api_client.auth.sensitive import SensitiveString

logger = logging.getLogger(__name__)

ENV_ADDRESS = "ADMIN_API_ADDRESS"
ENV_USERNAME = "ADMIN_API_USER"
ENV_PASSWORD = "ADMIN_API_PASS"
ENV_CLIENT_ID = "ADMIN_API_CLIENT_ID"
ENV_PRIVATE_KEY_FILE = "ADMIN_API_PRIVATE_KEY_FILE"

TOKEN_ENDPOINT_PATH = "/oauth/token/"


@dataclass
class ConnectionSettings:
    """Where to connect and which credentials to use."""

    address: str
    username: str | None = None
    password: SensitiveString | None = None
    client_id: str | None = None
    private_key: SensitiveString | None = None
    token: AuthToken | None = None

    @classmethod
    def from_environment(cls, resolver: CredentialResolver | None = None) -> "ConnectionSettings":
        """Read connection settings from environment variables.

        Raises:
            CredentialNotFoundError: If the address is not set, or a username
                is set without a password.
        """
        resolver = resolver or CredentialResolver()

        address = resolver.resolve(env_var_name=ENV_ADDRESS, required=True, mask_in_logs=False)
        username = resolver.resolve(env_var_name=ENV_USERNAME, mask_in_logs=False)
        password = resolver.resolve_secret(env_var_name=ENV_PASSWORD)
        client_id = resolver.resolve(env_var_name=ENV_CLIENT_ID, mask_in_logs=False)
        private_key = resolver.resolve_from_file(env_var_name=ENV_PRIVATE_KEY_FILE, required=client_id is not None)

        if username is not None and password is None:
            raise CredentialNotFoundError(
                f"{ENV_USERNAME} was set in the environment, but {ENV_PASSWORD} was not",
                env_var_name=ENV_PASSWORD,
            )

        return cls(
            address=address,
            username=username,
            password=password,
            client_id=client_id,
            private_key=private_key,
        )


def oauth2_token_endpoint(address: str) -> str:
    """Return the OAuth2 token endpoint of the server at ``address``."""
    return base_url_from_address(address) + TOKEN_ENDPOINT_PATH


def create_auth_provider(
    settings: ConnectionSettings,
    http_client: httpx.AsyncClient,
    on_token_refreshed: Callable[[AuthToken], None] | None = None,
) -> AuthProvider:
    """Pick and construct the auth provider matching ``settings``.

    OAuth2 wins when a client id is configured, then basic auth when a
    username is configured; otherwise requests go out unauthenticated.

    Raises:
        SigningKeyError: If OAuth2 is configured with an unusable private key.
    """
    if settings.client_id is not None:
        logger.debug(f"Using OAuth2 authentication for client {settings.client_id}")
        return OAuth2(
            http_client,
            endpoint=oauth2_token_endpoint(settings.address),
            client_id=settings.client_id,
            private_key=settings.private_key,
            current_token=settings.token,
            on_token_refreshed=on_token_refreshed,
        )

    if settings.username is not None:
        logger.debug(f"Using basic authentication for user {settings.username}")
        return BasicAuth(settings.username, settings.password or SensitiveString(""))

    logger.debug("No credentials configured, requests will be unauthenticated")
    return NoAuth()
