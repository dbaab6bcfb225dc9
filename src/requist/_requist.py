import io
from datetime import timedelta
from logging import getLogger
from typing import Any, Optional, Union

from httpx import URL, BaseTransport, Client, Headers, QueryParams, Response, codes

from ._config import Config
from ._decoders import BodyDecoder, decoder_for
from ._providers import BodyProvider, FormProvider, JsonProvider, TextProvider
from ._utils import (
    RequestSpec,
    default_transport,
    encode_basic_auth,
    get_httpx_client_kwargs,
    header_user_agent,
    normalize_base,
    resolve_path,
    setup_logging,
)
from ._utils.constants import (
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
)
from .models.errors import BaseUrlInvalidError
from .models.http_method import HttpMethod


class Requist:
    """Fluent HTTP request builder bound to one base URL.

    Every builder method mutates the instance in place and returns it, so
    calls can be chained. Query parameters are reset after each request; all
    other settings persist across requests on the same instance.

    An instance is not safe for concurrent use. Create one instance per
    in-flight request (``clone`` copies an existing configuration) or guard
    it with an external lock.

    Examples:
        ```python
        from requist import JSON_CONTENT_TYPE, Requist

        user = {}
        with Requist("https://api.example.com") as client:
            client.accept(JSON_CONTENT_TYPE).get("/user/1000", user)
            print(client.status_code, user)
        ```
    """

    def __init__(self, base_url: str, *, config: Optional[Config] = None) -> None:
        self._logger = getLogger("requist")
        self._config = config or Config.from_env()

        if self._config.debug:
            setup_logging(True)

        base = normalize_base(base_url)
        if not base:
            raise BaseUrlInvalidError(base_url)

        self._base_url = base
        self._path = ""
        self._uri: Optional[str] = None
        self._method = HttpMethod.GET
        self._headers = Headers()
        self._queries = QueryParams()
        self._auth = ""
        self._status_code = 0
        self._provider: Optional[BodyProvider] = None
        self._decoder: Optional[BodyDecoder] = None

        self._timeout = self._config.timeout
        self._transport: Optional[BaseTransport] = None
        self._client = self._build_client()

    def _build_client(self) -> Client:
        transport = self._transport or default_transport(self._config.verify_ssl)
        return Client(
            transport=transport,
            headers=header_user_agent(),
            **get_httpx_client_kwargs(self._timeout, self._config.follow_redirects),
        )

    def __repr__(self) -> str:
        return (
            f"Requist(base_url={self._base_url!r}, method={self._method.value!r}, "
            f"path={self._path!r}, status_code={self._status_code})"
        )

    def __enter__(self) -> "Requist":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying transport."""
        self._client.close()

    def clone(self, base_url: Optional[str] = None) -> "Requist":
        """Create a new client that copies this one's configuration.

        Headers, basic auth, body provider, decoder, timeout and a
        caller-supplied transport are carried over. Path, URI override, query
        parameters and status code start fresh.

        Raises:
            BaseUrlInvalidError: If ``base_url`` is given and does not validate.
        """
        other = Requist(base_url or self._base_url, config=self._config)
        other._method = self._method
        other._headers = self._headers.copy()
        other._auth = self._auth
        other._provider = self._provider
        other._decoder = self._decoder
        other.set_client_timeout(self._timeout)
        if self._transport is not None:
            other.set_client_transport(self._transport)
        return other

    # Transport

    def set_client_transport(self, transport: Optional[BaseTransport]) -> "Requist":
        """Use ``transport`` for the following requests.

        ``None`` restores the hardened default transport.
        """
        self._client.close()
        self._transport = transport
        self._client = self._build_client()
        return self

    def set_client_timeout(self, timeout: Union[float, timedelta]) -> "Requist":
        """Set the overall request timeout, in seconds or as a ``timedelta``."""
        if isinstance(timeout, timedelta):
            seconds = timeout.total_seconds()
        else:
            seconds = float(timeout)
        if seconds <= 0:
            raise ValueError(f"Timeout must be positive, got {timeout!r}")

        self._timeout = seconds
        self._client.timeout = seconds  # type: ignore[assignment]
        return self

    # Target

    def base(self, base_url: str) -> "Requist":
        """Set the base URL; an invalid one leaves the base empty."""
        self._base_url = normalize_base(base_url)
        return self

    def path(self, path: str) -> "Requist":
        """Set the path of the next requests; an invalid one leaves it empty."""
        self._path = resolve_path(self._base_url, path)
        return self

    def uri(self, uri: str) -> "Requist":
        """Send the next request to ``uri`` verbatim.

        The override takes precedence over the base URL, the path and the query
        parameters, and is consumed by that single request.
        """
        self._uri = uri
        return self

    def method(self, method: Union[str, HttpMethod]) -> "Requist":
        """Set the HTTP method; unrecognized names fall back to GET."""
        self._method = HttpMethod.parse(method)
        return self

    # Headers

    def add_header(self, key: str, value: str) -> "Requist":
        """Append ``value`` to the values already stored under ``key``."""
        self._headers = Headers([*self._headers.multi_items(), (key, value)])
        return self

    def set_header(self, key: str, value: str) -> "Requist":
        """Replace every value stored under ``key`` with ``value``."""
        self._headers[key] = value
        return self

    def del_header(self, key: str) -> "Requist":
        if key in self._headers:
            del self._headers[key]
        return self

    # Query parameters

    def add_query_param(self, key: str, value: str) -> "Requist":
        self._queries = self._queries.add(key, value)
        return self

    def set_query_param(self, key: str, value: str) -> "Requist":
        self._queries = self._queries.set(key, value)
        return self

    def del_query_param(self, key: str) -> "Requist":
        self._queries = self._queries.remove(key)
        return self

    def clean_query_params(self) -> "Requist":
        self._queries = QueryParams()
        return self

    # Authentication

    def set_basic_auth(self, username: str, password: str) -> "Requist":
        """Send HTTP Basic credentials; ignored unless both parts are non-empty."""
        if username and password:
            self._auth = f"{username}:{password}"
            self.set_header(HEADER_AUTHORIZATION, encode_basic_auth(self._auth))
        return self

    def get_basic_auth(self) -> str:
        """Return the plaintext ``username:password``, empty if never set."""
        return self._auth

    # Bodies

    def body_provider(self, provider: Optional[BodyProvider]) -> "Requist":
        """Attach ``provider`` as the request body.

        Also sets ``Content-Type`` and selects the matching decoder for the
        response, the same way ``accept`` does.
        """
        if provider is None:
            return self

        content_type = provider.content_type
        if content_type:
            self._provider = provider
            self.set_header(HEADER_CONTENT_TYPE, content_type)
            self.accept(content_type)
        return self

    def body_as_form(self, payload: Any) -> "Requist":
        if payload is None:
            return self
        return self.body_provider(FormProvider(payload))

    def body_as_json(self, payload: Any) -> "Requist":
        if payload is None:
            return self
        return self.body_provider(JsonProvider(payload))

    def body_as_text(self, payload: Any) -> "Requist":
        if payload is None:
            return self
        return self.body_provider(TextProvider(payload))

    def clear_body(self) -> "Requist":
        """Stop sending a body and drop the ``Content-Type`` header."""
        self._provider = None
        return self.del_header(HEADER_CONTENT_TYPE)

    def body_response(self, decoder: Optional[BodyDecoder]) -> "Requist":
        """Decode responses with ``decoder`` and advertise its ``Accept`` type."""
        if decoder is None:
            return self

        accept_type = decoder.accept_type
        if accept_type:
            self._decoder = decoder
            self.set_header(HEADER_ACCEPT, accept_type)
        return self

    def accept(self, accept_type: str) -> "Requist":
        """Select the decoder for ``accept_type``.

        Unsupported types detach the decoder, so response bodies are read and
        discarded.
        """
        decoder = decoder_for(accept_type)
        if decoder is None:
            self._logger.debug(
                f"No decoder for {accept_type!r}, response bodies will be discarded"
            )
            self._decoder = None
            return self
        return self.body_response(decoder)

    # Inspection

    @property
    def status_code(self) -> int:
        """Status code of the last response, ``0`` before any request."""
        return self._status_code

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def request_path(self) -> str:
        return self._path

    @property
    def http_method(self) -> HttpMethod:
        return self._method

    @property
    def headers(self) -> Headers:
        return self._headers.copy()

    @property
    def query_params(self) -> QueryParams:
        return self._queries

    @property
    def provider(self) -> Optional[BodyProvider]:
        return self._provider

    @property
    def decoder(self) -> Optional[BodyDecoder]:
        return self._decoder

    @property
    def timeout(self) -> float:
        return self._timeout

    # Execution

    def _request_url(self) -> URL:
        if self._uri is not None:
            uri, self._uri = self._uri, None
            return URL(uri)

        # stable sort keeps the insertion order of repeated keys
        params = QueryParams(sorted(self._queries.multi_items(), key=lambda p: p[0]))
        return URL(f"{self._base_url}{self._path}", params=params)

    def _build_spec(self) -> RequestSpec:
        url = self._request_url()
        content = self._provider.body() if self._provider is not None else None

        return RequestSpec(
            method=self._method.value,
            url=url,
            headers=self._headers.copy(),
            content=content,
        )

    def _masked_headers(self, headers: Headers) -> list[tuple[str, str]]:
        return [
            (key, "***" if key.lower() == HEADER_AUTHORIZATION.lower() else value)
            for key, value in headers.multi_items()
        ]

    def _decode(self, response: Response, success: Any, failure: Any) -> None:
        if response.status_code == codes.NO_CONTENT or self._decoder is None:
            return

        target = success if codes.is_success(response.status_code) else failure
        if target is None:
            return

        self._decoder.decode(io.BytesIO(response.content), target)

    def execute(self, success: Any = None, failure: Any = None) -> "Requist":
        """Send one request with the current configuration.

        A 2xx response is decoded into ``success``, any other status except
        204 into ``failure``. Targets left as ``None`` are skipped, as is every
        response when no decoder is attached.

        Returns:
            Requist: This client, for chaining.

        Raises:
            BodyEncodeError: If the body cannot be encoded. Nothing is sent.
            BodyDecodeError: If the response body cannot be decoded. The status
                code has already been recorded.
            httpx.HTTPError: Transport and request construction failures,
                propagated unchanged.
        """
        try:
            spec = self._build_spec()

            self._logger.debug(f"Request: {spec.method} {spec.url}")
            self._logger.debug(f"HEADERS: {self._masked_headers(spec.headers)}")

            request = self._client.build_request(
                spec.method, spec.url, headers=spec.headers, content=spec.content
            )
            response = self._client.send(request)

            try:
                self._status_code = response.status_code
                self._logger.debug(f"Response: {response.status_code} {spec.url}")
                self._decode(response, success, failure)
            finally:
                response.close()
        finally:
            self.clean_query_params()

        return self

    # Verbs

    def head(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.HEAD).path(path).execute(success, failure)

    def get(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.GET).path(path).execute(success, failure)

    def put(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.PUT).path(path).execute(success, failure)

    def post(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.POST).path(path).execute(success, failure)

    def patch(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.PATCH).path(path).execute(success, failure)

    def delete(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.DELETE).path(path).execute(success, failure)

    def options(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.OPTIONS).path(path).execute(success, failure)

    def trace(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.TRACE).path(path).execute(success, failure)

    def connect(self, path: str, success: Any = None, failure: Any = None) -> "Requist":
        return self.method(HttpMethod.CONNECT).path(path).execute(success, failure)


def new(base_url: str, *, config: Optional[Config] = None) -> Optional[Requist]:
    """Create a client, or return ``None`` when ``base_url`` does not validate."""
    try:
        return Requist(base_url, config=config)
    except BaseUrlInvalidError:
        return None
