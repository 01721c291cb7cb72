"""Domain models for onetimesecret metadata and secrets."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Tuple

from .errors import DecodeError

# Customer id the service assigns to secrets created without credentials
ANONYMOUS_CUSTOMER = "anon"

TIME_FORMAT = "%Y-%m-%d %H:%M:%S %z %Z"


def format_time(moment: datetime) -> str:
    """Render an instant in UTC, e.g. '2017-03-22 23:13:04 +0000 UTC'."""
    return moment.astimezone(timezone.utc).strftime(TIME_FORMAT)


class Timestamp(int):
    """Seconds since the UNIX epoch, as delivered by the service."""

    def to_datetime(self) -> datetime:
        """Convert to an aware datetime in UTC."""
        return datetime.fromtimestamp(int(self), tz=timezone.utc)

    def __str__(self) -> str:
        return format_time(self.to_datetime())


def _field(data: Dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass; a JSON true must not pass as a count of seconds
    if kind is int and isinstance(value, bool):
        raise DecodeError(f"field '{key}' must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise DecodeError(f"field '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


def _recipients(data: Dict[str, Any]) -> Tuple[str, ...]:
    value = _field(data, "recipient", list, [])
    for item in value:
        if not isinstance(item, str):
            raise DecodeError(f"field 'recipient' must hold strings, got {item!r}")
    return tuple(value)


def _timestamp(data: Dict[str, Any], key: str) -> Timestamp:
    ts = Timestamp(_field(data, key, int, 0))
    try:
        ts.to_datetime()
    except (ValueError, OverflowError, OSError):
        raise DecodeError(f"field '{key}' is not a representable time: {int(ts)}")
    return ts


@dataclass(frozen=True)
class Metadata:
    """
    Data about a secret, but never the secret value itself.

    Attributes:
        customer_id: Owner of the secret ('anon' for anonymous secrets)
        metadata_key: Private key used to fetch this metadata. DO NOT share it.
        secret_key: Key that retrieves the secret value; this is the one to share
        recipient: Addresses that were emailed a link to the secret
        passphrase_required: True when a passphrase was set at creation
        ttl: Configured time-to-live in seconds (not the time remaining)
        metadata_ttl: Seconds the metadata has left to live
        secret_ttl: Seconds the secret has left to live
        created: Creation time
        updated: Last update time
        received: Time the secret was first viewed, zero while unviewed
    """
    customer_id: str = ""
    metadata_key: str = ""
    secret_key: str = ""
    recipient: Tuple[str, ...] = ()
    passphrase_required: bool = False
    ttl: int = 0
    metadata_ttl: int = 0
    secret_ttl: int = 0
    created: Timestamp = Timestamp(0)
    updated: Timestamp = Timestamp(0)
    received: Timestamp = Timestamp(0)

    @classmethod
    def from_dict(cls, data: Any) -> "Metadata":
        """
        Build metadata from a decoded JSON object.

        Missing or null fields take their zero value.

        Raises:
            DecodeError: If data is not an object, a field has the wrong type,
                or a time (including the deadline) is outside the datetime range
        """
        if not isinstance(data, dict):
            raise DecodeError(f"expected a metadata object, got {type(data).__name__}")
        metadata = cls(
            customer_id=_field(data, "custid", str, ""),
            metadata_key=_field(data, "metadata_key", str, ""),
            secret_key=_field(data, "secret_key", str, ""),
            recipient=_recipients(data),
            passphrase_required=_field(data, "passphrase_required", bool, False),
            ttl=_field(data, "ttl", int, 0),
            metadata_ttl=_field(data, "metadata_ttl", int, 0),
            secret_ttl=_field(data, "secret_ttl", int, 0),
            created=_timestamp(data, "created"),
            updated=_timestamp(data, "updated"),
            received=_timestamp(data, "received"),
        )
        try:
            metadata.deadline
        except OverflowError:
            raise DecodeError(f"ttl {metadata.ttl} puts the deadline outside the datetime range")
        return metadata

    @property
    def deadline(self) -> datetime:
        """Absolute expiry: creation time plus the configured TTL."""
        return self.created.to_datetime() + timedelta(seconds=self.ttl)

    @property
    def status(self) -> str:
        """'unread' until the secret has been viewed, then 'read'."""
        if self.received == 0:
            return "unread"
        return "read"


@dataclass(frozen=True)
class GeneratedSecret:
    """A freshly generated secret value together with its metadata."""
    metadata: Metadata
    value: str

    @classmethod
    def from_dict(cls, data: Any) -> "GeneratedSecret":
        metadata = Metadata.from_dict(data)
        value = data.get("value")
        if not isinstance(value, str):
            raise DecodeError("generated secret response has no 'value'")
        return cls(metadata=metadata, value=value)

    def __getattr__(self, name: str) -> Any:
        # Only called for names not found on the instance: expose metadata fields
        if name == "metadata":
            raise AttributeError(name)
        return getattr(self.metadata, name)
