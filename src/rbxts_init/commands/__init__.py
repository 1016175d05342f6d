"""Command implementations exposed by the rbxts-init CLI."""

from .init import init_project

__all__ = ["init_project"]
