"""POSIX-style permission bitmask model.

Only the nine low-order mode bits are represented. Bits above ``0o777``
(setuid, setgid, sticky) are never produced by ``to_number`` and are kept
intact by ``apply_to_mode``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from pathtree.errors import UnsupportedOption

__all__ = [
    "FALLBACK_MODE",
    "PERMISSION_BITS",
    "RIGHTS",
    "ROLES",
    "Permissions",
    "RolePermissions",
    "apply_to_mode",
    "default_permissions",
]

ROLES = ("owner", "group", "other")
RIGHTS = ("read", "write", "execute")

# Mask of the bits this model owns.
PERMISSION_BITS = 0o777

# Used when the process umask cannot be queried.
FALLBACK_MODE = 0o755


class RolePermissions(BaseModel):
    """Access rights for one role."""

    model_config = ConfigDict(frozen=True)

    read: bool = False
    write: bool = False
    execute: bool = False


class Permissions(BaseModel):
    """Read/write/execute rights for owner, group and other."""

    model_config = ConfigDict(frozen=True)

    owner: RolePermissions = RolePermissions()
    group: RolePermissions = RolePermissions()
    other: RolePermissions = RolePermissions()

    @classmethod
    def from_mode(cls, mode: int) -> Permissions:
        """Unpack the nine low bits of a numeric mode.

        Bits are read high to low: owner read/write/execute, then group,
        then other. Higher bits are ignored.

        Example:
            >>> str(Permissions.from_mode(0o750))
            'rwxr-x---'
        """
        values: dict[str, dict[str, bool]] = {}
        shift = 8
        for role in ROLES:
            values[role] = {}
            for right in RIGHTS:
                values[role][right] = bool((mode >> shift) & 1)
                shift -= 1
        return cls.model_validate(values)

    @classmethod
    def merge(cls, partial: Any, base: Permissions) -> Permissions:
        """Overlay partial permissions on a base.

        Args:
            partial: A mapping such as ``{"owner": {"write": True}}``, an int
                mode, another Permissions, or None. Roles and rights missing
                from a mapping keep the base's values.
            base: Permissions supplying unspecified values.

        Returns:
            The merged Permissions.

        Raises:
            UnsupportedOption: If the mapping names an unknown role or right.
        """
        if partial is None:
            return base
        if isinstance(partial, Permissions):
            return partial
        if isinstance(partial, int) and not isinstance(partial, bool):
            return cls.from_mode(partial)
        if not isinstance(partial, Mapping):
            raise UnsupportedOption(f"Unsupported permissions value: {partial!r}")

        values = base.model_dump()
        for role, rights in partial.items():
            if role not in ROLES:
                raise UnsupportedOption(f"Unknown permission role: {role}")
            if isinstance(rights, RolePermissions):
                rights = rights.model_dump()
            if not isinstance(rights, Mapping):
                raise UnsupportedOption(f"Rights for {role} must be a mapping")
            for right, enabled in rights.items():
                if right not in RIGHTS:
                    raise UnsupportedOption(f"Unknown permission right: {right}")
                values[role][right] = bool(enabled)
        return cls.model_validate(values)

    def to_number(self) -> int:
        """Pack the rights back into a nine-bit mode."""
        result = 0
        for role in ROLES:
            role_permissions = getattr(self, role)
            for right in RIGHTS:
                result = (result << 1) | int(getattr(role_permissions, right))
        return result

    def __str__(self) -> str:
        flags = []
        for role in ROLES:
            role_permissions = getattr(self, role)
            for right, letter in zip(RIGHTS, "rwx"):
                flags.append(letter if getattr(role_permissions, right) else "-")
        return "".join(flags)


def default_permissions(umask: int | None) -> Permissions:
    """Permissions for newly created entries.

    Args:
        umask: The process umask, or None when it could not be queried.

    Returns:
        ``~umask & 0o777``, or ``0o755`` without a umask.
    """
    if umask is None:
        return Permissions.from_mode(FALLBACK_MODE)
    return Permissions.from_mode(~umask & PERMISSION_BITS)


def apply_to_mode(current_mode: int, permissions: Permissions) -> int:
    """Replace the permission bits of a mode, keeping all higher bits."""
    return (current_mode & ~PERMISSION_BITS) | permissions.to_number()
