import pytest

from tests.fakes import FakeTable, make_config


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def table():
    return FakeTable()
