"""Factory for creating provider instances.

Decouples provider selection from provider implementation. The SDK uses this
factory to instantiate providers by name, without importing concrete providers.
"""

from __future__ import annotations

from collections.abc import Callable

from ifbsync.contracts.config import IfbSyncConfig
from ifbsync.contracts.provider import Provider
from ifbsync.providers.dry_run import DryRunProvider
from ifbsync.providers.ifb import IfbProvider


def _ifb(config: IfbSyncConfig, token: str) -> Provider:
    return IfbProvider(
        base_url=config.base_url,
        profile_id=config.profile_id,
        token=token,
        timeout_s=config.timeout_s,
        max_retries=config.max_retries,
    )


def _dry_run(config: IfbSyncConfig, token: str) -> Provider:
    return DryRunProvider(source=_ifb(config, token))


# Registry mapping provider names to their constructors
_REGISTRY: dict[str, Callable[[IfbSyncConfig, str], Provider]] = {
    "ifb": _ifb,
    "dry-run": _dry_run,
}


def create_provider(name: str, *, config: IfbSyncConfig, token: str) -> Provider:
    """Create a provider instance by name.

    The returned provider is a context manager::

        with create_provider("ifb", config=config, token=token) as provider:
            pages = provider.list_pages()

    Raises:
        ValueError: If the provider name is not registered.
    """
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY))
        raise ValueError(f"Unknown provider: {name!r}. Available: {available}")
    return _REGISTRY[name](config, token)
