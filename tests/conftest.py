"""Shared pytest fixtures for domain, adapter and CLI tests.

Fixtures use descriptive names that read as plain English; tests pick
them up through pytest's conftest discovery.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from smtp_adapter.adapters.memory.transport import TransportSpy
    from smtp_adapter.composition import AppServices


def _load_dotenv() -> None:
    """Load a repository ``.env`` for integration settings when present."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

#: Minimal ``[smtp]`` section a delivery can resolve.
SMTP_SECTION: dict[str, Any] = {"server": "smtp.test.com", "port": 2525}


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` when parsing output so log records on stderr do
    not interfere.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory (real config files, real logging)."""
    from smtp_adapter.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore them after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before the test."""
    from smtp_adapter.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from plain dicts, without provenance."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def transport_spy() -> TransportSpy:
    """Provide a fresh TransportSpy."""
    from smtp_adapter.adapters.memory import TransportSpy

    return TransportSpy()


@pytest.fixture
def smtp_environ() -> dict[str, str]:
    """Provide an isolated environment mapping for indirection tests."""
    return {"SMTP_USERNAME": "mailer", "SMTP_PASSWORD": "s3cret"}


@dataclass
class CliStory:
    """Services factory plus the spy that captures what it sent."""

    factory: Callable[[], Any]
    spy: TransportSpy


@pytest.fixture
def cli_story(clear_config_cache: None) -> Callable[..., CliStory]:
    """Wire testing services around an injected configuration.

    Returns a function taking the config dict (``smtp`` defaults to
    :data:`SMTP_SECTION`) and returning a :class:`CliStory`. Display uses
    the production adapter so output can be asserted; logging uses the
    production initializer because commands bind the lib_log_rich runtime.

    Example:
        def test_send(cli_runner, cli_story) -> None:
            story = cli_story()
            cli_runner.invoke(cli, ["send-email", ...], obj=story.factory)
            assert story.spy.sent
    """
    from smtp_adapter.adapters.config.display import display_config
    from smtp_adapter.adapters.logging.setup import init_logging
    from smtp_adapter.adapters.memory import TransportSpy as TransportSpyImpl
    from smtp_adapter.composition import build_testing

    def _create(data: dict[str, Any] | None = None) -> CliStory:
        spy = TransportSpyImpl()
        config = Config(data if data is not None else {"smtp": dict(SMTP_SECTION)}, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = replace(
            build_testing(spy=spy),
            get_config=_fake_get_config,
            display_config=display_config,
            init_logging=init_logging,
        )
        return CliStory(factory=lambda: services, spy=spy)

    return _create
