"""Process environment collaborator.

Wraps the working directory, the platform separator and the umask so the
rest of the package can be exercised against a test double.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


class RealEnvironment:
    """Production environment implementation.

    Satisfies the EnvironmentProvider protocol structurally.
    """

    def working_directory(self) -> str:
        """Return the current working directory, always ending in a separator."""
        cwd = os.getcwd()
        return cwd if cwd.endswith(os.sep) else cwd + os.sep

    def set_working_directory(self, path: str) -> None:
        """Change the process working directory to the canonical form of path."""
        os.chdir(os.path.realpath(path))

    def separator(self) -> str:
        """Return the platform path separator."""
        return os.sep

    def umask(self) -> int | None:
        """Read the process umask without changing it.

        The umask can only be read by setting it, so the previous value is
        written back immediately.

        Returns:
            The current umask, or None if the platform has no umask.
        """
        if not hasattr(os, "umask"):
            logger.debug("umask not supported on this platform")
            return None
        current = os.umask(0o022)
        os.umask(current)
        return current
