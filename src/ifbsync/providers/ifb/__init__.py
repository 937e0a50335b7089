"""iFormBuilder provider."""

from ifbsync.providers.ifb.provider import IfbProvider

__all__ = ["IfbProvider"]
