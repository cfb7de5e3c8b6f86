"""
Settings for the UDP sink hole: where to listen and how often to dump statistics
"""
from typing import Tuple
from constants import DEFAULT_INTERVAL, DEFAULT_PORT, MIN_INTERVAL

ListeningPoint = Tuple[str, int]


def parse_listening_address(text: str, default_port: int = DEFAULT_PORT) -> ListeningPoint:
    """
    Parse a 'host[:port]' string into a listening point.

    IPv6 literals need brackets when a port is given, e.g. '[::1]:7655'.
    Raises ValueError for an empty host or a port that is not a number in 0..65535.
    """
    text = text.strip()
    if text.startswith('['):
        end = text.find(']')
        if end == -1:
            raise ValueError(f'Unterminated IPv6 literal: {text!r}')
        host = text[1:end]
        rest = text[end + 1:]
        if rest and not rest.startswith(':'):
            raise ValueError(f'Garbage after IPv6 literal: {text!r}')
        portText = rest[1:] if rest else None
    else:
        host, sep, portText = text.partition(':')
        if not sep:
            portText = None

    if not host:
        raise ValueError(f'Missing host in listening address: {text!r}')

    if portText is None:
        return (host, default_port)

    try:
        port = int(portText)
    except ValueError:
        raise ValueError(f'Port must be an integer: {portText!r}') from None
    if not 0 <= port <= 65535:
        raise ValueError(f'Port out of range: {port}')
    return (host, port)


class Settings:
    """
    Keeps track of all the settings available for the sink hole.

    The listening point is the only mandatory setting and cannot be changed
    once set. The interval controls how frequently statistics are dumped
    (in seconds) and never goes below one.
    """

    def __init__(self, listeningPoint: ListeningPoint, interval: int = DEFAULT_INTERVAL):
        if listeningPoint is None:
            raise ValueError('A listening point is required')
        host, port = listeningPoint
        self._listeningPoint = (host, int(port))
        self._interval = DEFAULT_INTERVAL
        self.setInterval(interval)

    @property
    def listeningPoint(self) -> ListeningPoint:
        return self._listeningPoint

    @property
    def host(self) -> str:
        return self._listeningPoint[0]

    @property
    def port(self) -> int:
        return self._listeningPoint[1]

    @property
    def interval(self) -> int:
        return self._interval

    def setInterval(self, interval: int):
        # Out of range values are normalized, never rejected
        self._interval = max(int(interval), MIN_INTERVAL)

    def __str__(self):
        host, port = self._listeningPoint
        if ':' in host:
            host = f'[{host}]'
        return (f'Listening point: {host}:{port}\n'
                f'Interval (s)   : {self._interval}')

    def __repr__(self):
        return f'Settings(listeningPoint={self._listeningPoint!r}, interval={self._interval})'
