"""Auth module public exports."""

from ifbsync.auth.base import TokenResolver
from ifbsync.auth.factory import create_token_resolver

__all__ = ["TokenResolver", "create_token_resolver"]
