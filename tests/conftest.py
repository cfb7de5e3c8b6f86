import logging
import pytest
from twisted.internet.abstract import isIPAddress, isIPv6Address
from twisted.internet.error import CannotListenError, InvalidAddressError
from twisted.internet.interfaces import IReactorUDP
from twisted.internet.task import Clock
from zope.interface import implementer
import log_setup
from constants import STATS_LOGGER_NAME


class FakePort:
    def __init__(self, port, interface):
        self.port = port
        self.interface = interface
        self.listening = True

    def stopListening(self):
        self.listening = False


@implementer(IReactorUDP)
class FakeUDPReactor(Clock):
    """Clock that also pretends to bind UDP ports"""

    def __init__(self, failWith=None):
        Clock.__init__(self)
        self.udpServers = []
        self.failWith = failWith
        self.ran = False

    def listenUDP(self, port, protocol, interface='', maxPacketSize=8192):
        if self.failWith is not None:
            raise CannotListenError(interface, port, self.failWith)
        if interface and not (isIPAddress(interface) or isIPv6Address(interface)):
            raise InvalidAddressError(interface, 'not an IPv4 or IPv6 address.')
        self.udpServers.append((port, protocol, interface))
        return FakePort(port, interface)

    def run(self):
        self.ran = True


@pytest.fixture
def fake_reactor():
    return FakeUDPReactor()


@pytest.fixture
def failing_reactor():
    return FakeUDPReactor(failWith=OSError(98, 'Address already in use'))


def reset_logging():
    """Undo log_setup.configure_logging()"""
    root = logging.getLogger()
    handler = log_setup._handlers.pop('ops', None)
    if handler is not None:
        root.removeHandler(handler)

    stats = logging.getLogger(STATS_LOGGER_NAME)
    handler = log_setup._handlers.pop('stats', None)
    if handler is not None:
        stats.removeHandler(handler)
    stats.propagate = True

    if log_setup._observer is not None:
        log_setup._observer.stop()
        log_setup._observer = None


@pytest.fixture(autouse=True)
def clean_logging():
    yield
    reset_logging()
