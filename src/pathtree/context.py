"""Application context for dependency injection.

This module separates object creation from object use. The default
permissions are computed once, in ``create_context``, and handed to every
consumer through the context instead of living in hidden global state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path as FsPath
from typing import TYPE_CHECKING, Any

from pathtree.config import ConfigManager
from pathtree.metadata import Metadata
from pathtree.mutator import TreeMutator
from pathtree.paths import NATIVE, PathSyntax
from pathtree.permissions import Permissions, default_permissions
from pathtree.protocols import EnvironmentProvider, MetadataProvider, MutationProvider
from pathtree.walker import TreeWalker

if TYPE_CHECKING:
    from pathtree.path import Path


@dataclass
class TreeContext:
    """Container for the collaborators and shared settings.

    Dependencies are typed using Protocols, so test doubles can be injected
    without inheritance. ``metadata``, ``walker`` and ``mutator`` are wired
    from the providers on construction.

    ``syntax`` is the one the providers understand and is used to build every
    path handed to them. ``algebra_syntax`` is the user's ``separator``
    setting and only applies to pure path computations.
    """

    metadata_provider: MetadataProvider
    mutation_provider: MutationProvider
    environment: EnvironmentProvider
    default_permissions: Permissions
    syntax: PathSyntax = NATIVE
    algebra_syntax: PathSyntax = NATIVE
    config_manager: ConfigManager = field(default_factory=ConfigManager.create_default)
    metadata: Metadata = field(init=False)
    walker: TreeWalker = field(init=False)
    mutator: TreeMutator = field(init=False)

    def __post_init__(self) -> None:
        """Wire the services from the providers."""
        self.metadata = Metadata(self.metadata_provider)
        self.walker = TreeWalker(self.metadata, self.syntax)
        self.mutator = TreeMutator(
            self.metadata,
            self.mutation_provider,
            self.default_permissions,
            self.syntax,
        )

    def path(self, *parts: Any) -> Path:
        """Create a Path bound to this context."""
        from pathtree.path import Path

        return Path(*parts, context=self)

    def working_directory(self) -> str:
        """Return the working directory, ending in a separator."""
        return self.environment.working_directory()


def create_context(config_dir: FsPath | None = None) -> TreeContext:
    """Factory for production dependencies.

    Use this in production code. For tests, construct TreeContext directly
    with test doubles.

    Args:
        config_dir: Override the configuration directory (for testing).

    Returns:
        Configured TreeContext.
    """
    from pathtree.environment import RealEnvironment
    from pathtree.filesystem import RealFileSystem

    config_manager = (
        ConfigManager.create(config_dir) if config_dir else ConfigManager.create_default()
    )
    config = config_manager.load()
    environment = RealEnvironment()
    filesystem = RealFileSystem()

    configured_mode = config.default_mode_value()
    if configured_mode is not None:
        permissions = Permissions.from_mode(configured_mode)
    else:
        permissions = default_permissions(environment.umask())

    return TreeContext(
        metadata_provider=filesystem,
        mutation_provider=filesystem,
        environment=environment,
        default_permissions=permissions,
        algebra_syntax=config.syntax(),
        config_manager=config_manager,
    )
