import json
import sys
from typing import Any, Optional
from urllib.parse import parse_qsl, urlsplit

import click
import httpx
from pydantic import RootModel

from .._config import Config
from .._requist import Requist
from .._utils import normalize_base
from .._utils.constants import FORM_CONTENT_TYPE, JSON_CONTENT_TYPE, TEXT_CONTENT_TYPE
from ..models.errors import RequistError
from ..models.http_method import HttpMethod


def _split_pair(value: str, separator: str, option: str) -> tuple[str, str]:
    key, found, rest = value.partition(separator)
    if not found or not key.strip():
        raise click.BadParameter(
            f"expected KEY{separator}VALUE, got {value!r}", param_hint=option
        )
    if separator == ":":
        rest = rest.strip()
    return key.strip(), rest


def _destination(accept: str) -> Any:
    if accept == JSON_CONTENT_TYPE:
        return RootModel[Any](None)
    if accept == FORM_CONTENT_TYPE:
        return {}
    if accept == TEXT_CONTENT_TYPE:
        return bytearray()
    return None


def _render(destination: Any) -> Optional[str]:
    if isinstance(destination, RootModel):
        if destination.root is None:
            return None
        return json.dumps(destination.root, indent=2, ensure_ascii=False)
    if isinstance(destination, dict) and destination:
        return json.dumps(destination, indent=2, ensure_ascii=False)
    if isinstance(destination, bytearray) and destination:
        return destination.decode("utf-8", errors="replace")
    return None


@click.command()
@click.argument(
    "verb", type=click.Choice([m.value for m in HttpMethod], case_sensitive=False)
)
@click.argument("url")
@click.option("-H", "--header", "headers", multiple=True, help="Header as KEY:VALUE")
@click.option(
    "-q", "--query", "queries", multiple=True, help="Query parameter as KEY=VALUE"
)
@click.option("-u", "--user", help="Basic auth credentials as USER:PASSWORD")
@click.option("--json", "json_body", help="JSON request body")
@click.option("--form", "form_fields", multiple=True, help="Form field as KEY=VALUE")
@click.option(
    "--accept",
    default=JSON_CONTENT_TYPE,
    show_default=True,
    help="Expected response content type",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Timeout in seconds",
)
@click.option("--debug", is_flag=True, help="Log requests and responses")
def request(
    verb: str,
    url: str,
    headers: tuple[str, ...],
    queries: tuple[str, ...],
    user: Optional[str],
    json_body: Optional[str],
    form_fields: tuple[str, ...],
    accept: str,
    timeout: Optional[float],
    debug: bool,
) -> None:
    """Send one VERB request to URL and print the decoded response."""
    if json_body is not None and form_fields:
        raise click.UsageError("--json and --form cannot be combined")

    base = normalize_base(url)
    if not base:
        raise click.BadParameter(
            f"{url!r} is not a valid http(s) URL", param_hint="URL"
        )

    config = Config.from_env()
    updates: dict[str, Any] = {"debug": debug or config.debug}
    if timeout is not None:
        updates["timeout"] = timeout
    config = config.model_copy(update=updates)

    parsed = urlsplit(url)

    with Requist(base, config=config) as client:
        for header in headers:
            client.add_header(*_split_pair(header, ":", "--header"))

        for key, value in parse_qsl(parsed.query, keep_blank_values=True):
            client.add_query_param(key, value)
        for query in queries:
            client.add_query_param(*_split_pair(query, "=", "--query"))

        if user:
            username, _, password = user.partition(":")
            client.set_basic_auth(username, password)

        if json_body is not None:
            try:
                client.body_as_json(json.loads(json_body))
            except json.JSONDecodeError as e:
                raise click.BadParameter(str(e), param_hint="--json") from e
        elif form_fields:
            fields: dict[str, list[str]] = {}
            for field in form_fields:
                key, value = _split_pair(field, "=", "--form")
                fields.setdefault(key, []).append(value)
            client.body_as_form(fields)

        client.accept(accept)
        success = failure = None
        if HttpMethod.parse(verb) is not HttpMethod.HEAD:
            success = _destination(accept)
            failure = _destination(accept)

        try:
            client.method(verb).path(parsed.path).execute(success, failure)
        except (RequistError, httpx.HTTPError) as e:
            click.echo(f"Error: {e}", err=True)
            raise click.Abort() from e

        status = client.status_code
        click.echo(f"HTTP {status}", err=True)

        output = _render(success if httpx.codes.is_success(status) else failure)
        if output is not None:
            click.echo(output)

        if not httpx.codes.is_success(status):
            sys.exit(1)
