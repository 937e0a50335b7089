"""Static token resolver."""

from __future__ import annotations

from dataclasses import dataclass

from ifbsync.auth.base import TokenResolver
from ifbsync.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class StaticTokenResolver(TokenResolver):
    token: str

    def resolve(self) -> str:
        token = self.token.strip()
        if not token:
            raise AuthenticationError("Static token is empty")
        return token
