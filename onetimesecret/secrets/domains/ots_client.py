"""onetimesecret.com API client."""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests

from ... import __version__
from .errors import APIError, DecodeError, TransportError
from .models import GeneratedSecret, Metadata
from .options import Option, apply_options

logger = logging.getLogger(__name__)

BASE_API = "https://onetimesecret.com/api/v1"
USER_AGENT = f"python-onetimesecret/{__version__}"

RequestObserver = Callable[[requests.PreparedRequest], None]
ResponseObserver = Callable[[requests.Response], None]


@dataclass(frozen=True)
class ClientConfig:
    """Identity used to authenticate. Both empty means anonymous."""
    username: str = ""
    api_token: str = ""

    @property
    def authenticated(self) -> bool:
        """Credentials are sent only when both fields are set."""
        return bool(self.username) and bool(self.api_token)


class Client:
    """
    Client for the onetimesecret.com API.

    Every operation is a single form-encoded POST. Responses with status
    >= 400 raise APIError; transport failures raise TransportError and
    malformed bodies raise DecodeError.

    Args:
        username: Account name (optional)
        api_token: API token (optional)
        base_url: API root, defaults to the public service
        timeout: Seconds to wait on the transport, None to wait indefinitely
        session: requests.Session to send through (one is created if omitted)
        on_request: Called with each prepared request before it is sent
        on_response: Called with each response before it is decoded
    """

    def __init__(
        self,
        username: Optional[str] = None,
        api_token: Optional[str] = None,
        *,
        base_url: str = BASE_API,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        on_request: Optional[RequestObserver] = None,
        on_response: Optional[ResponseObserver] = None,
    ):
        self.config = ClientConfig(username or "", api_token or "")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.on_request = on_request
        self.on_response = on_response

    def create_secret(self, value: str, *options: Option) -> Metadata:
        """
        Store value as a secret.

        Args:
            value: Secret text; the service rejects empty values
            options: TTL, Passphrase and/or Recipient

        Returns:
            Metadata assigned by the service
        """
        params = apply_options({"secret": value}, options)
        return Metadata.from_dict(self.do("/share", params))

    def generate_secret(self, *options: Option) -> GeneratedSecret:
        """Have the service generate a random secret and return it with its metadata."""
        params = apply_options({}, options)
        return GeneratedSecret.from_dict(self.do("/generate", params))

    def retrieve_secret(self, secret_key: str, passphrase: str = "") -> str:
        """
        Fetch (and thereby consume) a secret value.

        An empty passphrase is not sent at all. Unknown, already consumed and
        wrong-passphrase secrets all fail with APIError('Unknown secret').
        """
        params = {}
        if passphrase:
            params["passphrase"] = passphrase
        data = self.do(f"/secret/{quote(secret_key, safe='')}", params)
        if not isinstance(data, dict) or not isinstance(data.get("value"), str):
            raise DecodeError("secret response has no 'value'")
        return data["value"]

    def retrieve_secret_with_passphrase(self, secret_key: str, passphrase: str) -> str:
        return self.retrieve_secret(secret_key, passphrase)

    def retrieve_metadata(self, metadata_key: str) -> Metadata:
        """Fetch metadata for a secret. Does not consume the secret."""
        data = self.do(f"/private/{quote(metadata_key, safe='')}")
        return Metadata.from_dict(data)

    def retrieve_recent_metadata(self) -> List[Metadata]:
        """
        Fetch recent metadata for the authenticated account.

        Secret keys are not included. Upstream routes this path to the
        single-item metadata endpoint, so expect it to fail.
        """
        data = self.do("/private/recent")
        if not isinstance(data, list):
            raise DecodeError(f"expected a list of metadata, got {type(data).__name__}")
        return [Metadata.from_dict(item) for item in data]

    def do(self, path: str, params: Optional[Dict[str, str]] = None, decode: bool = True) -> Any:
        """
        Perform one API exchange.

        Args:
            path: Endpoint path relative to base_url
            params: Form parameters
            decode: If False the success body is ignored and None returned

        Returns:
            Decoded JSON body of a successful response

        Raises:
            TransportError: Request could not be built or sent
            APIError: Service answered with status >= 400
            DecodeError: Response body was not valid JSON of the expected shape
        """
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        auth = None
        if self.config.authenticated:
            auth = (self.config.username, self.config.api_token)

        try:
            prepared = requests.Request(
                "POST", self.base_url + path, data=params or {}, headers=headers, auth=auth
            ).prepare()
        except (requests.RequestException, ValueError) as e:
            raise TransportError(f"could not build request for {path}: {e}") from e

        if self.on_request is not None:
            self.on_request(prepared)

        # Picks up REQUESTS_CA_BUNDLE, proxies and the session verify/cert settings
        settings = self.session.merge_environment_settings(prepared.url, {}, None, None, None)

        logger.debug(f"POST {path} (authenticated={self.config.authenticated})")
        try:
            response = self.session.send(prepared, timeout=self.timeout, **settings)
        except requests.RequestException as e:
            raise TransportError(f"request to {path} failed: {e}") from e
        logger.debug(f"POST {path} -> {response.status_code}")

        if self.on_response is not None:
            self.on_response(response)

        if response.status_code >= 400:
            raise self._decode_error(response)

        if not decode:
            return None
        return self._decode_json(response)

    @staticmethod
    def _decode_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON in response (status {response.status_code}): {e}") from e

    def _decode_error(self, response: requests.Response) -> APIError:
        data = self._decode_json(response)
        if not isinstance(data, dict):
            raise DecodeError(f"expected an error object, got {type(data).__name__}")
        message = data.get("message", "")
        if not isinstance(message, str):
            raise DecodeError(f"error message must be a string, got {message!r}")
        logger.debug(f"API error {response.status_code}: {message}")
        return APIError(message, status_code=response.status_code)
