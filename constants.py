PROGRAM_NAME = 'udpsinkhole'

DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 7655
DEFAULT_LISTENING_ADDRESS = f'{DEFAULT_HOST}:{DEFAULT_PORT}'

DEFAULT_INTERVAL = 1
MIN_INTERVAL = 1

# Statistics get their own logger so they can be routed to a different
# destination and format than the normal program logging
STATS_LOGGER_NAME = 'udpsinkhole.stats'
STATS_FORMAT = 'n={}'

OPS_LOG_FORMAT = '%(asctime)s %(levelname)-5s [%(name)s] %(message)s'
STATS_LOG_FORMAT = '%(asctime)s %(message)s'
