from sinkhole import UdpSinkHole
from settings import Settings


def get_transport(settings: Settings, reactor=None) -> UdpSinkHole:
    """
    Get a running sink hole for the given settings

    Args:
        settings: listening point and statistics interval
        reactor: reactor to listen and schedule on (None for the global one)

    Raises SinkholeError (BindError on a failed bind) when it cannot be started.
    """
    sinkhole = UdpSinkHole(settings, reactor)
    sinkhole.create()
    sinkhole.start()
    return sinkhole
