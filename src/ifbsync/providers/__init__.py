"""Provider implementations and factory."""

from ifbsync.providers.dry_run import DryRunProvider
from ifbsync.providers.factory import create_provider
from ifbsync.providers.ifb import IfbProvider

__all__ = ["DryRunProvider", "IfbProvider", "create_provider"]
