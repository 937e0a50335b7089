"""Concrete token resolvers."""

from ifbsync.auth.resolvers.env import EnvTokenResolver
from ifbsync.auth.resolvers.static import StaticTokenResolver

__all__ = ["EnvTokenResolver", "StaticTokenResolver"]
