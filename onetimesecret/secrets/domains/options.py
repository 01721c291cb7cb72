"""Optional modifiers for secret creation and generation requests."""
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Iterable, Union


class Option:
    """An option writes exactly one key into the outgoing form parameters."""

    key: str = ""

    def value(self) -> str:
        raise NotImplementedError

    def apply(self, params: Dict[str, str]) -> Dict[str, str]:
        params[self.key] = self.value()
        return params


@dataclass(frozen=True)
class TTL(Option):
    """Expire the secret after the given duration (whole seconds, truncated)."""
    duration: Union[timedelta, int, float]
    key = "ttl"

    def value(self) -> str:
        if isinstance(self.duration, timedelta):
            seconds = self.duration.total_seconds()
        else:
            seconds = self.duration
        return str(int(seconds))


@dataclass(frozen=True)
class Passphrase(Option):
    """Require this passphrase to retrieve the secret value."""
    text: str
    key = "passphrase"

    def value(self) -> str:
        return self.text


@dataclass(frozen=True)
class Recipient(Option):
    """
    Email a link to the secret (never the secret itself).

    The client must be authenticated for the service to honour this.
    """
    email: str
    key = "recipient"

    def value(self) -> str:
        return self.email


def apply_options(params: Dict[str, str], options: Iterable[Option]) -> Dict[str, str]:
    """Apply options in order; the last write to a key wins."""
    for option in options:
        option.apply(params)
    return params
