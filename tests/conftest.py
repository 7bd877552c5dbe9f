import pytest

from pocketcalc.presets import get_policy


@pytest.fixture(autouse=True)
def fresh_policy():
    get_policy.cache_clear()
    yield
    get_policy.cache_clear()
