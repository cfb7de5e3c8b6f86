"""
UDP sink hole: listens on a UDP port and consumes anything that shows up.

Mainly used when testing SIP related services (send RTP at it). Every datagram
is counted and dropped, and the running total is dumped to the statistics
logger every few seconds.
"""
import logging
import socket
from twisted.internet import reactor as default_reactor
from twisted.internet.abstract import isIPAddress, isIPv6Address
from twisted.internet.error import CannotListenError, InvalidAddressError
from twisted.internet.interfaces import IReactorTime, IReactorUDP
from twisted.internet.protocol import DatagramProtocol
from constants import STATS_FORMAT, STATS_LOGGER_NAME
from counter import PacketCounter
from settings import Settings

logger = logging.getLogger(__name__)
statLogger = logging.getLogger(STATS_LOGGER_NAME)

STATE_UNINITIALIZED = 'uninitialized'
STATE_INITIALIZED = 'initialized'
STATE_RUNNING = 'running'


class SinkholeError(Exception):
    pass


class BindError(SinkholeError):
    def __init__(self, listeningPoint, reason):
        self.listeningPoint = listeningPoint
        self.reason = reason
        host, port = listeningPoint
        SinkholeError.__init__(self, f'Unable to bind {host}:{port}: {reason}')


class LifecycleError(SinkholeError, RuntimeError):
    pass


class UdpSinkHole(DatagramProtocol):
    def __init__(self, settings: Settings, reactor=None):
        if settings is None:
            raise ValueError('settings are required')
        self.settings = settings
        self.reactor = reactor
        self.state = STATE_UNINITIALIZED
        self.port = None
        self.timeout = None
        self._packetsReceived = PacketCounter()

    @property
    def packetsReceived(self) -> int:
        return self._packetsReceived.get()

    def create(self):
        """
        Set up everything the sink hole needs before it can start:
        the UDP transport and the timer used for dumping statistics.
        Nothing is bound yet.
        """
        if self.state != STATE_UNINITIALIZED:
            raise LifecycleError(f'create() called on a sink hole that is {self.state}')

        if self.reactor is None:
            self.reactor = default_reactor
        if not IReactorUDP.providedBy(self.reactor):
            raise SinkholeError(f'{self.reactor!r} does not support UDP')
        if not IReactorTime.providedBy(self.reactor):
            raise SinkholeError(f'{self.reactor!r} has no timer support')

        self.state = STATE_INITIALIZED

    def start(self):
        """Bind the listening point and schedule the first statistics dump"""
        if self.state != STATE_INITIALIZED:
            raise LifecycleError(f'start() called on a sink hole that is {self.state}')

        logger.info("Starting the UDP sink hole with settings:")
        for line in str(self.settings).splitlines():
            logger.info(line)

        host, port = self.settings.listeningPoint
        interface = self.resolveInterface(host, port)
        try:
            self.port = self.reactor.listenUDP(port, self, interface=interface)
        except CannotListenError as e:
            raise BindError(self.settings.listeningPoint, e.socketError) from e
        except InvalidAddressError as e:
            raise BindError(self.settings.listeningPoint, e.message) from e

        self.state = STATE_RUNNING
        self.scheduleReport()

    def resolveInterface(self, host: str, port: int) -> str:
        """
        Turn a host name into an address listenUDP accepts.

        IP literals are passed through untouched. Names are looked up and the
        first address wins; a failed lookup is a BindError.
        """
        if isIPAddress(host) or isIPv6Address(host):
            return host
        try:
            addresses = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
        except socket.gaierror as e:
            raise BindError(self.settings.listeningPoint, e) from e
        interface = addresses[0][4][0]
        logger.debug("Resolved %s to %s", host, interface)
        return interface

    def scheduleReport(self):
        # At most one report is ever pending
        if self.timeout is not None and self.timeout.active():
            raise LifecycleError('a statistics report is already scheduled')
        self.timeout = self.reactor.callLater(self.settings.interval, self.reportStats)

    def reportStats(self):
        statLogger.info(STATS_FORMAT.format(self._packetsReceived.get()))
        # Relative to now, not to when this call was due, so a slow report
        # delays the next one instead of stacking them up
        self.timeout = None
        self.scheduleReport()

    def datagramReceived(self, datagram: bytes, addr):
        self._packetsReceived.increment()

    def connectionRefused(self):
        self.transportError('connection refused (ICMP port unreachable)')

    def transportError(self, reason):
        """
        Log an asynchronous fault reported by the transport and keep going.

        Twisted only calls connectionRefused() on a connected UDP port, and this
        port is never connected, so ICMP bounces do not normally arrive here.
        Other socket read errors are logged by Twisted itself.
        """
        logger.warning("Transport error on %s:%d: %s", self.settings.host, self.settings.port, reason)

    def __repr__(self):
        return f'<UdpSinkHole {self.state} {self.settings!r} n={self.packetsReceived}>'
