import pytest

from courtside.config import Config
from courtside.services import InMemoryRepository, ServiceFactory
from courtside.ui import create_app

from .support import StubClock


@pytest.fixture()
def clock():
    return StubClock()


@pytest.fixture()
def factory(clock):
    return ServiceFactory(Config(data_file=""), repository=InMemoryRepository(), clock=clock)


@pytest.fixture()
def flask_app(factory):
    application = create_app(factory)
    application.config["TESTING"] = True
    return application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
