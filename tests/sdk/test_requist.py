import base64
from datetime import timedelta

import httpx
import pytest

from requist import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    BaseUrlInvalidError,
    Config,
    FormDecoder,
    HttpMethod,
    JsonDecoder,
    JsonProvider,
    Requist,
    TextDecoder,
    new,
)
from tests.utils.models import UserInfo


class TestNew:
    @pytest.mark.parametrize(
        "base_url",
        ["", "https://?bar&?foo", "file:///root/test/filename.json", "https://.x.test"],
    )
    def test_returns_none_for_invalid_base(self, base_url: str) -> None:
        assert new(base_url) is None

    def test_returns_client_for_valid_base(self) -> None:
        client = new("http://live.apitest.org/some/path?x=1")

        assert isinstance(client, Requist)
        assert client.base_url == "http://live.apitest.org"
        assert client.status_code == 0
        assert client.http_method is HttpMethod.GET
        client.close()

    def test_constructor_raises_for_invalid_base(self) -> None:
        with pytest.raises(BaseUrlInvalidError) as exc_info:
            Requist("ftp://files.test")

        assert exc_info.value.base_url == "ftp://files.test"

    def test_uses_environment_configuration(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("REQUIST_TIMEOUT", "9")

        with Requist("http://x.test") as client:
            assert client.timeout == 9.0


class TestTransport:
    def test_default_timeout(self, client: Requist) -> None:
        assert client.timeout == 4.0

    def test_set_client_timeout_in_seconds(self, client: Requist) -> None:
        assert client.set_client_timeout(10) is client

        assert client.timeout == 10.0

    def test_set_client_timeout_from_timedelta(self, client: Requist) -> None:
        client.set_client_timeout(timedelta(milliseconds=1500))

        assert client.timeout == 1.5

    @pytest.mark.parametrize("timeout", [0, -1, timedelta(0)])
    def test_set_client_timeout_rejects_non_positive(
        self, client: Requist, timeout: float
    ) -> None:
        with pytest.raises(ValueError):
            client.set_client_timeout(timeout)

    def test_set_client_transport(self, client: Requist) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(204))

        assert client.set_client_transport(transport) is client
        client.get("/ping")

        assert client.status_code == 204

    def test_set_client_transport_none_restores_default(self, client: Requist) -> None:
        client.set_client_transport(httpx.MockTransport(lambda r: httpx.Response(200)))

        client.set_client_transport(None)

        assert client.set_client_timeout(2).timeout == 2.0


class TestTarget:
    def test_base_with_empty_url(self, client: Requist) -> None:
        assert client.base("").base_url == ""

    def test_base_with_invalid_url(self, client: Requist) -> None:
        assert client.base("file:///root/test/filename.json").base_url == ""

    def test_base_with_valid_url(self, client: Requist) -> None:
        client.base("https://live.apitest.org/ignored?x=1")

        assert client.base_url == "https://live.apitest.org"

    def test_path_empty(self, client: Requist) -> None:
        assert client.path("").request_path == ""

    def test_path_invalid(self, client: Requist) -> None:
        assert client.path("file:///root/test/filename.json").request_path == ""

    def test_path_valid(self, client: Requist) -> None:
        path = "/valid/route/to/resource"

        assert client.path(path).request_path == path

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("get", HttpMethod.GET),
            ("GET", HttpMethod.GET),
            ("invalidverb", HttpMethod.GET),
            ("post", HttpMethod.POST),
            (HttpMethod.TRACE, HttpMethod.TRACE),
        ],
    )
    def test_method(self, client: Requist, name: str, expected: HttpMethod) -> None:
        assert client.method(name).http_method is expected


class TestHeaders:
    def test_add_header_appends_values(self, client: Requist) -> None:
        client.add_header("X-Tag", "one").add_header("x-tag", "two")

        assert client.headers.get_list("X-Tag") == ["one", "two"]

    def test_set_header_replaces_values(self, client: Requist) -> None:
        client.add_header("X-Tag", "one").add_header("X-Tag", "two")

        client.set_header("X-TAG", "three")

        assert client.headers.get_list("X-Tag") == ["three"]

    def test_del_header(self, client: Requist) -> None:
        client.set_header("X-Tag", "one")

        client.del_header("x-tag")

        assert "X-Tag" not in client.headers

    def test_del_missing_header(self, client: Requist) -> None:
        assert client.del_header("X-Missing") is client

    def test_headers_property_is_a_copy(self, client: Requist) -> None:
        client.headers["X-Tag"] = "one"

        assert "X-Tag" not in client.headers


class TestQueryParams:
    def test_add_query_param(self, client: Requist) -> None:
        client.add_query_param("page", "1").add_query_param("page", "2")

        assert client.query_params.get_list("page") == ["1", "2"]

    def test_set_query_param(self, client: Requist) -> None:
        client.add_query_param("page", "1").set_query_param("page", "3")

        assert client.query_params.get_list("page") == ["3"]

    def test_del_query_param(self, client: Requist) -> None:
        client.set_query_param("page", "1")

        client.del_query_param("page")

        assert client.query_params.get("page") is None

    def test_clean_query_params(self, client: Requist) -> None:
        client._status_code = 200
        client.set_query_param("page", "1").set_query_param("size", "10")

        client.clean_query_params()

        assert len(client.query_params) == 0
        assert client.status_code == 200


class TestBasicAuth:
    @pytest.mark.parametrize(
        "username, password", [("", ""), ("anything", ""), ("", "anything")]
    )
    def test_incomplete_credentials_are_ignored(
        self, client: Requist, username: str, password: str
    ) -> None:
        client.set_basic_auth(username, password)

        assert client.get_basic_auth() == ""
        assert "Authorization" not in client.headers

    def test_sets_authorization_header(self, client: Requist) -> None:
        client.set_basic_auth("a", "b")

        expected = base64.b64encode(b"a:b").decode()
        assert client.get_basic_auth() == "a:b"
        assert client.headers["Authorization"] == f"Basic {expected}"


class TestBodies:
    @pytest.mark.parametrize("method", ["body_as_form", "body_as_json", "body_as_text"])
    def test_none_payload_attaches_nothing(self, client: Requist, method: str) -> None:
        getattr(client, method)(None)

        assert client.provider is None
        assert "Content-Type" not in client.headers

    def test_body_provider_none(self, client: Requist) -> None:
        assert client.body_provider(None).provider is None

    @pytest.mark.parametrize(
        "method, content_type, decoder_type",
        [
            ("body_as_form", FORM_CONTENT_TYPE, FormDecoder),
            ("body_as_json", JSON_CONTENT_TYPE, JsonDecoder),
            ("body_as_text", TEXT_CONTENT_TYPE, TextDecoder),
        ],
    )
    def test_payload_sets_content_type_and_decoder(
        self,
        client: Requist,
        method: str,
        content_type: str,
        decoder_type: type,
    ) -> None:
        getattr(client, method)({"Name": "Jonah Doe", "Age": 47})

        assert client.provider is not None
        assert client.provider.content_type == content_type
        assert client.headers["Content-Type"] == content_type
        assert client.headers["Accept"] == content_type
        assert isinstance(client.decoder, decoder_type)

    def test_body_as_form_encodes_payload(self, client: Requist) -> None:
        client.body_as_form({"Name": "Jonah Doe", "Age": 47})

        assert client.provider is not None
        assert client.provider.body() == b"Age=47&Name=Jonah+Doe"

    def test_body_as_json_encodes_payload(self, client: Requist) -> None:
        client.body_as_json(UserInfo(name="Jonah Doe", age=47))

        assert client.provider is not None
        assert client.provider.body() == b'{"name":"Jonah Doe","age":47}\n'

    def test_clear_body(self, client: Requist) -> None:
        client.body_provider(JsonProvider({"a": 1}))

        client.clear_body()

        assert client.provider is None
        assert "Content-Type" not in client.headers


class TestAccept:
    @pytest.mark.parametrize(
        "accept_type, decoder_type",
        [
            (JSON_CONTENT_TYPE, JsonDecoder),
            (FORM_CONTENT_TYPE, FormDecoder),
            (TEXT_CONTENT_TYPE, TextDecoder),
        ],
    )
    def test_known_types_select_decoder(
        self, client: Requist, accept_type: str, decoder_type: type
    ) -> None:
        client.accept(accept_type)

        assert isinstance(client.decoder, decoder_type)
        assert client.headers["Accept"] == accept_type

    @pytest.mark.parametrize("accept_type", ["", "application/xml"])
    def test_unknown_types_clear_decoder(
        self, client: Requist, accept_type: str
    ) -> None:
        client.accept(JSON_CONTENT_TYPE)

        client.accept(accept_type)

        assert client.decoder is None

    def test_body_response(self, client: Requist) -> None:
        decoder = TextDecoder()

        assert client.body_response(decoder).decoder is decoder
        assert client.headers["Accept"] == TEXT_CONTENT_TYPE

    def test_body_response_none(self, client: Requist) -> None:
        client.accept(JSON_CONTENT_TYPE)

        client.body_response(None)

        assert isinstance(client.decoder, JsonDecoder)


class TestClone:
    def test_copies_configuration(self, client: Requist) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(204))
        client.set_client_transport(transport).set_client_timeout(7)
        client.set_basic_auth("a", "b").body_as_json({"a": 1})
        client.set_header("X-Tag", "one").set_query_param("page", "1")
        client.path("/users")

        other = client.clone("https://other.test/api")

        assert other.base_url == "https://other.test"
        assert other.get_basic_auth() == "a:b"
        assert other.headers["X-Tag"] == "one"
        assert other.provider is client.provider
        assert other.decoder is client.decoder
        assert other.timeout == 7.0
        assert other.request_path == ""
        assert len(other.query_params) == 0
        assert other.status_code == 0

        other.get("/ping")
        assert other.status_code == 204
        other.close()

    def test_headers_are_not_shared(self, client: Requist) -> None:
        other = client.clone()

        other.set_header("X-Tag", "one")

        assert other.base_url == client.base_url
        assert "X-Tag" not in client.headers
        other.close()

    def test_rejects_invalid_base(self, client: Requist) -> None:
        with pytest.raises(BaseUrlInvalidError):
            client.clone("file:///tmp")


class TestDebugConfig:
    def test_debug_config_installs_handler(self) -> None:
        import logging

        with Requist("http://x.test", config=Config(debug=True)):
            logger = logging.getLogger("requist")

            assert logger.level == logging.DEBUG
            assert logger.handlers
