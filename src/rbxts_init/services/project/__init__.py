"""Project initialization service modules."""

from .initialize_project import (
    InitializeProjectDependencies,
    InitializeProjectOutcome,
    InitializeProjectRequest,
    InitializeProjectService,
    prepare_destination,
)
from .resolve_init_options import (
    ResolveInitOptionsOutcome,
    ResolveInitOptionsRequest,
    ResolveInitOptionsService,
)

__all__ = [
    "InitializeProjectDependencies",
    "InitializeProjectOutcome",
    "InitializeProjectRequest",
    "InitializeProjectService",
    "ResolveInitOptionsOutcome",
    "ResolveInitOptionsRequest",
    "ResolveInitOptionsService",
    "prepare_destination",
]
