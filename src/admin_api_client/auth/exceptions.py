"""Custom exceptions for credential resolution and authentication.

Credential exceptions describe configuration problems found while gathering
the settings used to build an auth provider. Auth exceptions are raised by
the providers themselves and share the client's :class:`ClientError` base,
so callers can handle every request failure in one place.

Example:
    ```python
    from admin_api_client.auth.exceptions import SigningKeyError

    try:
        auth = OAuth2(http_client, endpoint, client_id, private_key)
    except SigningKeyError as e:
        print(f"Cannot use OAuth2 key: {e}")
    ```
"""

from admin_api_client.errors.exceptions import ClientError


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        """Initialize CredentialNotFoundError.

        Args:
            message: Error message describing what credential is missing.
            env_var_name: Optional environment variable name for reference.
        """
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file (e.g. a private key) cannot be read."""

    pass


class AuthError(ClientError):
    """Base exception for failures while authenticating a request."""

    pass


class SigningKeyError(AuthError):
    """Raised when the OAuth2 private key is missing or not an EC PEM key.

    This is a configuration precondition, so it is raised when the provider is
    constructed rather than on the first request.
    """

    pass


class TokenRequestError(AuthError):
    """Raised when an OAuth2 access token could not be obtained.

    Covers an unreachable token endpoint, a non-success status, and a
    response that is not a valid bearer-token grant. ``status_code`` is set
    when the endpoint answered.
    """

    pass
