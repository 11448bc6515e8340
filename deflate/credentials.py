from __future__ import annotations

from dataclasses import dataclass, field

from deflate.errors import ConfigurationError

MASK = "***"


@dataclass(frozen=True)
class DeflateCredentials:
    api_key: str
    api_secret: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key:
            raise ConfigurationError("api_key must be a non-empty string")
        if not isinstance(self.api_secret, str) or not self.api_secret:
            raise ConfigurationError("api_secret must be a non-empty string")

    def as_auth(self) -> dict[str, str]:
        return {"api_key": self.api_key, "api_secret": self.api_secret}

    def masked_auth(self) -> dict[str, str]:
        """The auth object with the secret hidden, safe to log."""
        return {"api_key": self.api_key, "api_secret": MASK}
