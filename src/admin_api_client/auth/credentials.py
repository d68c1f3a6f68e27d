"""Connection credential resolution for the management API.

Credentials for a session (server address, basic-auth username and password,
or an OAuth2 client id and private key) can come from several places.
:class:`CredentialResolver` looks them up with priority ordering:

1. Explicitly provided value
2. Environment variable (including values loaded from a .env file)
3. Default value

Private keys are usually kept in a file; :meth:`CredentialResolver.resolve_from_file`
reads them, with the path given directly or through an environment variable.

Example:
    ```python
    from admin_api_client.auth import CredentialResolver

    resolver = CredentialResolver()

    address = resolver.resolve(env_var_name="ADMIN_API_ADDRESS", required=True, mask_in_logs=False)
    password = resolver.resolve_secret(env_var_name="ADMIN_API_PASS")
    private_key = resolver.resolve_from_file(env_var_name="ADMIN_API_PRIVATE_KEY_FILE")
    ```

Security Considerations:
    - Secrets are never logged; only their source (env var name, file path)
    - Secret values are returned wrapped in :class:`SensitiveString` where possible
    - The .env file is loaded once per resolver, under a lock
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from admin_api_client.auth.exceptions import CredentialFileError, CredentialNotFoundError
from admin_api_client.auth.sensitive import MASK, SensitiveString

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve connection credentials from explicit values, the environment, and files.

    Args:
        dotenv_path: Path to a .env file. If None, python-dotenv searches
            parent directories for one.
        load_dotenv: Whether to load a .env file at all. Disable in tests or
            when the environment is fully managed by the caller.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Load the .env file into the environment, at most once."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            # Attempted either way; a broken .env file is not fatal
            self._dotenv_loaded = True

    def _mask_credential(self, value: str | None) -> str:
        if value is None:
            return "None"
        return MASK

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve one setting.

        Args:
            value: Explicitly provided value; wins over every other source.
            env_var_name: Environment variable to check.
            default: Value used when no other source provides one.
            required: Raise instead of returning None when nothing is found.
            mask_in_logs: Mask the value in debug logs. Disable only for
                non-sensitive settings such as the server address.

        Returns:
            The resolved value, or None if not found and not required.

        Raises:
            CredentialNotFoundError: If ``required`` and no source provides a value.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = self._mask_credential(result) if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_secret(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> SensitiveString | None:
        """Resolve a secret (e.g. a password) and wrap it in a SensitiveString."""
        result = self.resolve(value=value, env_var_name=env_var_name, required=required)
        return SensitiveString(result) if result is not None else None

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> SensitiveString | None:
        """Read a secret, such as an OAuth2 private key, from a file.

        The path supports ``~`` and ``$VAR`` expansion and may be supplied
        through an environment variable instead. Surrounding whitespace is
        stripped from the file contents.

        Args:
            file_path: Path to the file.
            env_var_name: Environment variable holding the path, used when
                ``file_path`` is None.
            required: Raise instead of returning None when the file cannot be read.

        Returns:
            The file contents, or None if unreadable and not required.

        Raises:
            CredentialFileError: If ``required`` and no path is configured or
                the file cannot be read.
        """
        path_to_use = None

        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_to_use = self.resolve(env_var_name=env_var_name, mask_in_logs=False)

        if path_to_use is None:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None
        except PermissionError:
            error_msg = f"Permission denied reading credential file: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.warning(error_msg)
            return None
        except (OSError, UnicodeDecodeError) as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved credential from file: {path_obj} ({MASK})")
        return SensitiveString(content)
