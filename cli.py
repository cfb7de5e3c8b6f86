import argparse
import logging
import sys
from constants import DEFAULT_INTERVAL, DEFAULT_LISTENING_ADDRESS, PROGRAM_NAME
from log_setup import configure_logging
from settings import Settings, parse_listening_address
from sinkhole import SinkholeError
from transport import get_transport

logger = logging.getLogger(__name__)


def listening_address(text: str):
    try:
        return parse_listening_address(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def interval(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'only takes integers, got {text!r}')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME, add_help=False,
                                     description='Listens on a UDP port, consumes anything that shows up and periodically logs how many packets arrived')
    parser.add_argument('-h', action='help', help='Print this help')
    parser.add_argument('-l', metavar='ip:port', dest='listening_point', type=listening_address, default=DEFAULT_LISTENING_ADDRESS,
                        help=f'The listening point. Default is {DEFAULT_LISTENING_ADDRESS}')
    parser.add_argument('-t', metavar='interval', dest='interval', type=interval, default=DEFAULT_INTERVAL,
                        help='How frequently we are dumping statistics (in seconds). Default is 1')
    return parser


def parse_args(argv=None) -> Settings:
    """Parse the command line into Settings. Exits (via argparse) on -h or bad input."""
    parsed = build_parser().parse_args(argv)
    return Settings(parsed.listening_point, parsed.interval)


def main(argv=None, reactor=None) -> int:
    settings = parse_args(argv)
    configure_logging()

    if reactor is None:
        from twisted.internet import reactor

    try:
        sinkhole = get_transport(settings, reactor)
    except SinkholeError as e:
        logger.error("Not starting: %s", e)
        return 1

    logger.debug("Running %r", sinkhole)
    reactor.run()
    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
