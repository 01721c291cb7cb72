"""Client library and CLI for the onetimesecret.com API."""

__version__ = "0.1.0"

from .secrets.domains.errors import (
    OneTimeSecretError,
    TransportError,
    APIError,
    DecodeError,
)
from .secrets.domains.models import Timestamp, Metadata, GeneratedSecret
from .secrets.domains.options import Option, TTL, Passphrase, Recipient
from .secrets.domains.ots_client import Client, ClientConfig, BASE_API

__all__ = [
    "__version__",
    "Client",
    "ClientConfig",
    "BASE_API",
    "Option",
    "TTL",
    "Passphrase",
    "Recipient",
    "Timestamp",
    "Metadata",
    "GeneratedSecret",
    "OneTimeSecretError",
    "TransportError",
    "APIError",
    "DecodeError",
]
