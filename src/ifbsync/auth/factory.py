"""Pick the token resolver named by ``IfbSyncConfig.auth``."""

from __future__ import annotations

from collections.abc import Callable

from ifbsync.auth.base import TokenResolver
from ifbsync.auth.resolvers import EnvTokenResolver, StaticTokenResolver
from ifbsync.contracts.config import IfbSyncConfig
from ifbsync.contracts.exceptions import ConfigError

RESOLVERS: dict[str, Callable[[IfbSyncConfig], TokenResolver]] = {
    "env": lambda config: EnvTokenResolver(),
    "token": lambda config: StaticTokenResolver(token=config.token or ""),
}


def create_token_resolver(config: IfbSyncConfig) -> TokenResolver:
    try:
        build = RESOLVERS[config.auth]
    except KeyError:
        raise ConfigError(f"Unknown auth mode: {config.auth}") from None
    return build(config)
