"""Workflows for creating and inspecting secrets."""
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..domains.errors import OneTimeSecretError
from ..domains.models import Metadata
from ..domains.ots_client import Client
from ..domains.options import Recipient

logger = logging.getLogger(__name__)

SECRET_URL = "https://onetimesecret.com/secret/"


class WorkflowError(OneTimeSecretError):
    """A workflow step failed; the underlying error is chained as __cause__."""
    pass


@dataclass(frozen=True)
class CreatedSecret:
    """Result of create_secret. value is set only when the service generated it."""
    metadata: Metadata
    value: Optional[str] = None

    @property
    def generated(self) -> bool:
        return self.value is not None


def share_url(secret_key: str) -> str:
    """Link that lets a recipient view the secret once."""
    return SECRET_URL + secret_key


def create_secret(client: Client, value: Optional[str] = None, email: Optional[str] = None) -> CreatedSecret:
    """
    Create a secret from value, or have the service generate one.

    Args:
        client: Configured API client
        value: Secret text; when empty the service generates the value
        email: Address to send the secret link to

    Returns:
        CreatedSecret with metadata, plus the value if it was generated

    Raises:
        WorkflowError: If the service call fails
    """
    options = []
    if email:
        options.append(Recipient(email))

    if value:
        try:
            metadata = client.create_secret(value, *options)
        except OneTimeSecretError as e:
            raise WorkflowError(f"could not create secret: {e}") from e
        logger.info(f"Created secret owned by {metadata.customer_id}")
        return CreatedSecret(metadata=metadata)

    try:
        generated = client.generate_secret(*options)
    except OneTimeSecretError as e:
        raise WorkflowError(f"could not generate secret: {e}") from e
    logger.info(f"Generated secret owned by {generated.metadata.customer_id}")
    return CreatedSecret(metadata=generated.metadata, value=generated.value)


def inspect_secrets(client: Client, metadata_keys: Iterable[str]) -> Iterator[Metadata]:
    """
    Fetch metadata for each key, in order, yielding as each one arrives.

    Raises:
        WorkflowError: On the first key that cannot be fetched
    """
    for key in metadata_keys:
        try:
            metadata = client.retrieve_metadata(key)
        except OneTimeSecretError as e:
            raise WorkflowError(f"cannot fetch info about secret: {e}") from e
        yield metadata
