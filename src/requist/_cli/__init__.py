import click
from dotenv import load_dotenv

from .cli_request import request


@click.group()
@click.version_option(package_name="requist")
def cli() -> None:
    """Send HTTP requests from the command line.

    \b
    Example:
        requist request get https://httpbin.org/get -q page=2
    """
    load_dotenv()


cli.add_command(request)
