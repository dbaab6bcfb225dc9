import logging
import sys
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner

# Ensure local source package (src/requist) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from requist import Config, Requist  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("REQUIST_TIMEOUT", raising=False)
    monkeypatch.delenv("REQUIST_DISABLE_SSL_VERIFY", raising=False)
    monkeypatch.delenv("REQUIST_DEBUG", raising=False)


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def base_url() -> str:
    return "http://x.test"


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def client(base_url: str, config: Config) -> Generator[Requist, None, None]:
    with Requist(base_url, config=config) as requist_client:
        yield requist_client


@pytest.fixture(autouse=True)
def reset_requist_logger() -> Generator[None, None, None]:
    """Undo handlers installed by ``setup_logging`` so caplog keeps working."""
    yield
    logger = logging.getLogger("requist")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
