__all__ = ['DEFAULT_PORT', 'DEFAULT_ENCODING', 'LINE_TERMINATOR', 'DATA_TERMINATOR', 'MAX_COMMAND_LENGTH',
           'DEFAULT_LOGGER_NAME', 'METHODS_TO_LOG', 'STATUS_DATABASES_PRESENT', 'STATUS_STRATEGIES_PRESENT',
           'STATUS_DATABASE_INFO', 'STATUS_SERVER_INFO', 'STATUS_DEFINITIONS_RETRIEVED', 'STATUS_WORD_DEFINITION',
           'STATUS_MATCHES_FOUND', 'STATUS_SERVER_STATUS', 'STATUS_BANNER', 'STATUS_CLOSING', 'STATUS_OK',
           'STATUS_INVALID_DATABASE', 'STATUS_INVALID_STRATEGY', 'STATUS_NO_MATCH', 'STATUS_NO_DATABASES',
           'STATUS_NO_STRATEGIES']

# well-known port assigned to the DICT protocol
DEFAULT_PORT = 2628

# DICT servers speak UTF-8 on the wire
DEFAULT_ENCODING = 'utf-8'

# lines are sent with CRLF, received with either CRLF or LF
LINE_TERMINATOR = '\r\n'

# a line made of a single period closes every textual block
DATA_TERMINATOR = '.'

# servers may reject longer command lines (including CRLF)
MAX_COMMAND_LENGTH = 1024

# 1yz: positive preliminary reply, a text block follows
STATUS_DATABASES_PRESENT = 110
STATUS_STRATEGIES_PRESENT = 111
STATUS_DATABASE_INFO = 112
STATUS_SERVER_INFO = 114
STATUS_DEFINITIONS_RETRIEVED = 150
STATUS_WORD_DEFINITION = 151
STATUS_MATCHES_FOUND = 152

# 2yz: positive completion reply
STATUS_SERVER_STATUS = 210
STATUS_BANNER = 220
STATUS_CLOSING = 221
STATUS_OK = 250

# 5yz: permanent negative reply, some of them just mean "nothing found"
STATUS_INVALID_DATABASE = 550
STATUS_INVALID_STRATEGY = 551
STATUS_NO_MATCH = 552
STATUS_NO_DATABASES = 554
STATUS_NO_STRATEGIES = 555

DEFAULT_LOGGER_NAME = 'dictclient'

METHODS_TO_LOG = (
    'get_definitions',
    'get_match_list',
    'get_database_list',
    'get_strategy_list',
    'get_database_info',
    'get_server_info',
    'get_status'
)
