"""Authentication components for the management API client.

This module provides:
- Auth providers that decorate outgoing requests (no auth, basic, OAuth2)
- Multi-source credential resolution (value → env → .env → default, files)
- A factory that picks the provider matching the configured credentials

Example:
    ```python
    from admin_api_client.auth import ConnectionSettings, create_auth_provider

    settings = ConnectionSettings.from_environment()
    auth = create_auth_provider(settings, http_client)
    ```
"""

from admin_api_client.auth.credentials import CredentialResolver
from admin_api_client.auth.exceptions import (
    AuthError,
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
    SigningKeyError,
    TokenRequestError,
)
from admin_api_client.auth.factory import ConnectionSettings, create_auth_provider, oauth2_token_endpoint
from admin_api_client.auth.providers import AuthProvider, AuthToken, BasicAuth, NoAuth, OAuth2
from admin_api_client.auth.sensitive import SensitiveString

__all__ = [
    "AuthError",
    "AuthProvider",
    "AuthToken",
    "BasicAuth",
    "ConnectionSettings",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "NoAuth",
    "OAuth2",
    "SensitiveString",
    "SigningKeyError",
    "TokenRequestError",
    "create_auth_provider",
    "oauth2_token_endpoint",
]
