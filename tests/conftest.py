import pytest

from ircconnect.config.model import Credentials
from ircconnect.irc.manager import ConnectionManager
from tests.helpers import FakeTransport, Recorder


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        real_name="My Name",
        nickname="mynick",
        password="hunter2",
        server="irc.example.org",
        port=6667,
    )


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def transports() -> list[FakeTransport]:
    return []


@pytest.fixture
def manager(recorder: Recorder, transports: list[FakeTransport]) -> ConnectionManager:
    def factory() -> FakeTransport:
        t = FakeTransport()
        transports.append(t)
        return t

    return ConnectionManager(
        recorder.sink, recorder, recorder.lookup, transport_factory=factory
    )
