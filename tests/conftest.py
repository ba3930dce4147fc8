import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = Path(__file__).resolve().parent

for path in (SRC, TESTS):
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fakes import (  # noqa: E402
    ACCOUNT_1,
    ACCOUNT_2,
    FakeChain,
    FakeJokeraceEligibility,
    FakeStakingEligibility,
    HAT_1_1,
    HAT_1_2,
    TOP_HAT,
)

from hats_modules.config import CONFIG_ENV_VAR, default_config  # noqa: E402
from hats_modules.logging_utils import LOGGER_NAME  # noqa: E402


@pytest.fixture(autouse=True)
def _packaged_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    default_config.cache_clear()
    yield
    default_config.cache_clear()


@pytest.fixture
def config():
    return default_config()


@pytest.fixture
def chain(config):
    chain = FakeChain()
    chain.install_factory(
        config.factory_address,
        {
            config.module("staking").implementation_address: FakeStakingEligibility,
            config.module("jokerace").implementation_address: FakeJokeraceEligibility,
        },
    )
    chain.wear(TOP_HAT, ACCOUNT_1)
    chain.wear(HAT_1_1, ACCOUNT_1)
    chain.wear(HAT_1_2, ACCOUNT_2)
    return chain


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
