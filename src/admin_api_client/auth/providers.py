"""Authentication providers for the management API.

Every provider exposes a single coroutine, ``decorate``, which adds
credentials to an outgoing :class:`httpx.Request` and returns it. The set of
providers is closed:

- :class:`NoAuth`: sends requests unauthenticated
- :class:`BasicAuth`: static username and password (HTTP Basic)
- :class:`OAuth2`: client-credentials grant using a signed JWT assertion,
  with an in-memory bearer token refreshed shortly before it expires

Example:
    ```python
    import httpx

    from admin_api_client.auth import OAuth2

    async with httpx.AsyncClient() as http_client:
        auth = OAuth2(
            http_client,
            endpoint="https://mgmt.example.com/oauth/token/",
            client_id="automation",
            private_key=pem_text,
        )
        request = await auth.decorate(httpx.Request("GET", url))
    ```
"""

import asyncio
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import httpx
import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from admin_api_client.auth.exceptions import SigningKeyError, TokenRequestError
from admin_api_client.auth.sensitive import SensitiveString

logger = logging.getLogger(__name__)


@dataclass
class AuthToken:
    """An OAuth2 bearer token and the moment it stops being valid."""

    secret: SensitiveString
    expires_at: datetime


class NoAuth:
    """Provider that leaves requests unauthenticated."""

    async def decorate(self, request: httpx.Request) -> httpx.Request:
        return request


class BasicAuth:
    """Provider that attaches a fixed username and password via HTTP Basic auth.

    Args:
        username: Account name
        password: Account password; stored as a :class:`SensitiveString`
    """

    def __init__(self, username: str, password: str | SensitiveString) -> None:
        self.username = username
        self.password = SensitiveString(password)

    async def decorate(self, request: httpx.Request) -> httpx.Request:
        flow = httpx.BasicAuth(self.username, self.password.secret()).auth_flow(request)
        return next(flow)

    def __repr__(self) -> str:
        return f"BasicAuth(username={self.username!r}, password={self.password!r})"


def load_signing_key(private_key: str | SensitiveString | None) -> ec.EllipticCurvePrivateKey:
    """Load an ES256 signing key from PEM text.

    Args:
        private_key: PEM-encoded, unencrypted P-256 private key

    Returns:
        The parsed private key

    Raises:
        SigningKeyError: If the key is missing, unparsable, or not a P-256 EC key
    """
    if not private_key:
        raise SigningKeyError("a private key is required for OAuth2")

    pem = SensitiveString(private_key).secret().encode()
    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningKeyError(f"invalid EC PEM key: {e}", cause=e) from e

    if not isinstance(key, ec.EllipticCurvePrivateKey) or not isinstance(key.curve, ec.SECP256R1):
        raise SigningKeyError("invalid EC PEM key: ES256 requires a P-256 elliptic-curve private key")
    return key


class OAuth2:
    """OAuth2 client-credentials provider using a signed JWT assertion.

    A single lock guards the cached token. The check-and-refresh sequence,
    including the round-trip to the token endpoint, runs under that lock, so
    concurrent requests wait for one refresh instead of issuing several.

    Args:
        http_client: Client used to reach the token endpoint
        endpoint: Token endpoint URL; also the ``aud`` claim of the assertion
        client_id: OAuth2 client id; the ``iss`` and ``sub`` claims
        private_key: PEM-encoded P-256 private key used to sign assertions
        current_token: Previously issued token to reuse while still valid
        on_token_refreshed: Called with every newly fetched token, e.g. to
            persist it for the next session
        clock: Returns the current UTC time (default: ``datetime.now(UTC)``)

    Raises:
        SigningKeyError: If ``private_key`` is not usable for ES256
    """

    # Tokens closer than this to expiry are refreshed before use
    REFRESH_MARGIN = timedelta(minutes=5)
    ASSERTION_LIFETIME = timedelta(hours=1)
    CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        endpoint: str,
        client_id: str,
        private_key: str | SensitiveString,
        current_token: AuthToken | None = None,
        on_token_refreshed: Callable[[AuthToken], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._http_client = http_client
        self.endpoint = endpoint
        self.client_id = client_id
        self._signing_key = load_signing_key(private_key)
        self._token = current_token
        self._on_token_refreshed = on_token_refreshed
        self._clock = clock or (lambda: datetime.now(UTC))
        self._lock = asyncio.Lock()

    @property
    def token(self) -> AuthToken | None:
        """The currently cached token, if any."""
        return self._token

    @staticmethod
    def generate_token_id() -> str:
        """Return a fresh assertion id: 18 random bytes as 36 hex characters."""
        return secrets.token_hex(18)

    async def decorate(self, request: httpx.Request) -> httpx.Request:
        """Attach a valid bearer token, fetching a new one if needed.

        Raises:
            TokenRequestError: If a new token was needed and could not be obtained
        """
        logger.debug("Configuring request with OAuth2 authentication")

        async with self._lock:
            token = self._token
            now = self._clock()
            if token is not None:
                if token.expires_at > now + self.REFRESH_MARGIN:
                    logger.debug(f"Using existing OAuth2 token (expires at: {token.expires_at})")
                    return self._attach(request, token)

                if token.expires_at < now:
                    logger.debug(f"Existing OAuth2 token is expired (expires at: {token.expires_at})")
                else:
                    logger.debug(f"Existing OAuth2 token expires soon (expires at: {token.expires_at})")

            logger.debug("Fetching new OAuth2 token")
            token = await self._fetch_token()
            logger.debug(f"Fetched new OAuth2 token (expires at: {token.expires_at})")
            self._token = token

        if self._on_token_refreshed is not None:
            try:
                self._on_token_refreshed(token)
            except Exception as e:
                logger.warning(f"Token refresh callback failed: {e}")

        return self._attach(request, token)

    def _attach(self, request: httpx.Request, token: AuthToken) -> httpx.Request:
        request.headers["Authorization"] = f"Bearer {token.secret.secret()}"
        return request

    def _build_assertion(self, issued_at: datetime) -> str:
        token_id = self.generate_token_id()
        logger.debug(f"Generated token ID: {token_id}")

        claims = {
            "iss": self.client_id,
            "aud": self.endpoint,
            "sub": self.client_id,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ASSERTION_LIFETIME).timestamp()),
            "jti": token_id,
        }
        return jwt.encode(claims, self._signing_key, algorithm="ES256")

    async def _fetch_token(self) -> AuthToken:
        issued_at = self._clock()
        form_data = {
            "grant_type": "client_credentials",
            "client_assertion_type": self.CLIENT_ASSERTION_TYPE,
            "client_assertion": self._build_assertion(issued_at),
        }

        try:
            response = await self._http_client.post(self.endpoint, data=form_data)
        except httpx.RequestError as e:
            raise TokenRequestError(f"failed to get OAuth2 token: {e}", cause=e) from e

        if not response.is_success:
            raise TokenRequestError(
                f"failed to get OAuth2 token: token endpoint returned {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                response=response,
            )

        try:
            body = response.json()
            access_token = body["access_token"]
            expires_in = int(body["expires_in"])
            token_type = body["token_type"]
        except (ValueError, TypeError, KeyError) as e:
            raise TokenRequestError(
                f"failed to get OAuth2 token: malformed token response ({e})",
                status_code=response.status_code,
                cause=e,
                response=response,
            ) from e

        if not isinstance(access_token, str) or str(token_type).lower() != "bearer":
            raise TokenRequestError(
                f"failed to get OAuth2 token: unsupported token type {token_type!r}",
                status_code=response.status_code,
                response=response,
            )

        return AuthToken(
            secret=SensitiveString(access_token),
            expires_at=issued_at + timedelta(seconds=expires_in),
        )


AuthProvider = NoAuth | BasicAuth | OAuth2
