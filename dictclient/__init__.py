from dictclient.constants import METHODS_TO_LOG, DEFAULT_PORT, DEFAULT_ENCODING
from dictclient.model import Database, MatchingStrategy, Definition, ALL_DATABASES, FIRST_MATCH, DEFAULT_STRATEGY
from dictclient.session import DictSession
from dictclient.utils import DictConnectionError, DictProtocolError, SessionClosedError
from dictclient.wrapper import log_wrapper, LOG_MODES

__version__ = '0.1.0'

__all__ = ('DictSession', 'Database', 'MatchingStrategy', 'Definition', 'ALL_DATABASES', 'FIRST_MATCH',
           'DEFAULT_STRATEGY', 'DictConnectionError', 'DictProtocolError', 'SessionClosedError', 'connect')


def connect(host: str, port: int = DEFAULT_PORT, *, timeout=None, encoding=DEFAULT_ENCODING, **kwargs):
    """
    Open a session with the DICT server at host:port.
    :param kwargs: log mode: 'log'='local' (log in local file (log.log))
                             'log'='tcp' or 'udp': log to 'log_host' & 'log_port'
    """
    log_mode = kwargs.pop('log', None)
    log_host, log_port = kwargs.pop('log_host', None), kwargs.pop('log_port', None)
    if kwargs:
        raise TypeError('Unexpected arguments: {0}'.format(', '.join(sorted(kwargs))))
    if log_mode is not None and log_mode not in LOG_MODES:
        raise ValueError('Unknown log mode: {0!r}'.format(log_mode))
    if log_mode in ('tcp', 'udp') and (log_host is None or log_port is None):
        raise ValueError('Host and port of Log Socket should be specified')

    session = DictSession(host, port, timeout=timeout, encoding=encoding)
    if log_mode is not None:
        try:
            session = log_wrapper(session, METHODS_TO_LOG, log_mode=log_mode, host=log_host, port=log_port)
        except Exception:
            session.close()
            raise
    return session
