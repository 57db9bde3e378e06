from __future__ import annotations

import asyncio
import inspect
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from roadmap.config import Config


@pytest.fixture
def config() -> Config:
    return Config(
        notion_token="secret_test",
        database_id="11111111-1111-1111-1111-111111111111",
    )


@pytest.fixture
def config_with_id_property() -> Config:
    return Config(
        notion_token="secret_test",
        database_id="11111111-1111-1111-1111-111111111111",
        id_property="Slug",
    )


@pytest.fixture
def config_missing() -> Config:
    return Config(notion_token="", database_id="")


@pytest.fixture
def notion_mock() -> SimpleNamespace:
    return SimpleNamespace(
        query_database=AsyncMock(return_value={"object": "list", "results": []}),
        get_page=AsyncMock(),
        close=AsyncMock(),
    )


def pytest_pyfunc_call(pyfuncitem):
    testfunc = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunc):
        kwargs = {name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames}
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            loop.run_until_complete(testfunc(**kwargs))
        finally:
            loop.close()
            asyncio.set_event_loop(None)
        return True
    return None
