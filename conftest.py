"""Configures pytest further."""
import pytest

from ssutils import RandomSource
from ssutils import SSPrivKey

# 13 squared times the Mersenne prime 2**31 - 1: a 39 bit n, a 35 bit pq and 4 byte blocks.
FIXED_P = 13
FIXED_Q = 2**31 - 1


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture
def rng() -> RandomSource:
    return RandomSource(42)


@pytest.fixture
def fixed_key() -> SSPrivKey:
    """A tiny, fully known key pair."""
    return SSPrivKey.from_primes(FIXED_P, FIXED_Q, "alice")


@pytest.fixture(scope="session")
def generated_key() -> SSPrivKey:
    return SSPrivKey.generate(256, 20, RandomSource(2025), "bob")
