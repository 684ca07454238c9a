"""Path algebra and filesystem tree operations."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from pathtree.protocols import (
    EnvironmentProvider,
    MetadataProvider,
    MutationProvider,
)

__all__ = [
    "__version__",
    "EnvironmentProvider",
    "MetadataProvider",
    "MutationProvider",
]
