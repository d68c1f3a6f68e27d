"""Namespaces of the management API.

The API is split into a fixed set of areas. Three of them are "command"
areas, which live under a shared ``/api/admin/command/v1`` prefix; the rest
each have their own versioned prefix.
"""

import logging
from enum import Enum
from functools import total_ordering

logger = logging.getLogger(__name__)


def base_url_from_address(address: str) -> str:
    """Normalise a user-supplied server address into a base URL.

    Bare host names get an ``https://`` scheme. Plain ``http://`` is kept
    but logged as insecure. Any trailing slash is removed.
    """
    address = address.strip()
    if address.startswith("http://"):
        logger.warning("Using insecure http protocol!")
    elif not address.startswith("https://"):
        address = f"https://{address}"
    return address.rstrip("/")


class CommandApi(Enum):
    """Sub-areas of the command API."""

    CONFERENCE = "conference"
    PARTICIPANT = "participant"
    PLATFORM = "platform"

    def __str__(self) -> str:
        return self.value


@total_ordering
class Api(Enum):
    """One administrative API area.

    Members are ordered by declaration, which is also the order used when
    enumerating every namespace with :meth:`all`.

    Example:
        ```python
        Api.CONFIGURATION.base_path  # "/api/admin/configuration/v1"
        Api.command(CommandApi.PARTICIPANT).base_path  # "/api/admin/command/v1/participant"
        ```
    """

    CONFIGURATION = "configuration"
    HISTORY = "history"
    STATUS = "status"
    COMMAND_CONFERENCE = "command-conference"
    COMMAND_PARTICIPANT = "command-participant"
    COMMAND_PLATFORM = "command-platform"

    @classmethod
    def all(cls) -> list["Api"]:
        """Return every namespace in declaration order."""
        return list(cls)

    @classmethod
    def command(cls, command: CommandApi) -> "Api":
        """Return the namespace for a command sub-area."""
        return cls(f"command-{command.value}")

    @property
    def command_api(self) -> CommandApi | None:
        """The command sub-area, or None for non-command namespaces."""
        if not self.is_command:
            return None
        return CommandApi(self.value.removeprefix("command-"))

    @property
    def is_command(self) -> bool:
        return self.value.startswith("command-")

    @property
    def path_segment(self) -> str:
        """URL path segment naming this area."""
        command = self.command_api
        if command is not None:
            return command.value
        return self.value.lower()

    @property
    def base_path(self) -> str:
        """Server-relative base path, without a trailing slash."""
        if self.is_command:
            return f"/api/admin/command/v1/{self.path_segment}"
        return f"/api/admin/{self.path_segment}/v1"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Api):
            return NotImplemented
        members = list(Api)
        return members.index(self) < members.index(other)

    def __str__(self) -> str:
        if self.is_command:
            return self.value
        return self.value.capitalize()
