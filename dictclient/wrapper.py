"""
Log wrapper records every lookup issued through a session, along with its
arguments, outcome and time, into a log file or to a remote log socket.
"""
import datetime
import functools
import logging
from logging import handlers as log_handlers

_log_file_name = 'log.log'

LOG_MODES = ('local', 'tcp', 'udp')

# if in debug mode
if __debug__:

    def _log_wrapper(func, logger: logging.Logger):
        logger.setLevel(logging.DEBUG)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = 'Called: ' + func.__name__ + '('
            # !r means call __repr__ only / !s means call __str__ only
            log += ','.join(['{0!r}'.format(a) for a in args] + ['{0!s}={1!r}'.format(k, v) for k, v in
                                                                 kwargs.items()])
            try:
                result = func(*args, **kwargs)
            except Exception as error:
                logger.debug(log + ') {0}: {1} at {time}'.format(type(error).__name__, error,
                                                                  time=datetime.datetime.now().isoformat()))
                raise
            logger.debug(log + ') at {time}'.format(time=datetime.datetime.now().isoformat()))
            return result

        return wrapper

else:
    def _log_wrapper(func, logger: logging.Logger):
        logger.setLevel(logging.INFO)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = 'Called: ' + func.__name__ + '('
            log += ','.join(['{0}'.format(a) for a in args] + ['{0}={1}'.format(k, v) for k, v in
                                                               kwargs.items()])
            log += ') at {time}'.format(time=datetime.datetime.now().isoformat())
            logger.info(log)
            return func(*args, **kwargs)

        return wrapper


def _make_handler(log_mode, host, port) -> logging.Handler:
    if log_mode == 'tcp':
        return log_handlers.SocketHandler(host=host, port=port)
    if log_mode == 'udp':
        return log_handlers.DatagramHandler(host=host, port=port)
    if log_mode == 'local':
        return logging.FileHandler(_log_file_name, mode='a')
    raise ValueError('Unknown log mode: {0!r}'.format(log_mode))


def log_wrapper(session, methods_to_log: tuple, log_mode='local', host=None, port=None):
    """
    :param session: instance to be logged, only this instance is affected.
    :param methods_to_log: methods of instance to be logged (both method name, parameters, time
                           of invoking will be logged)
    :param log_mode: 'local': log in local file (log.log)
                     'tcp' or 'udp': log to concrete host & port
    :param host: target host if log mode is 'tcp' or 'udp'
    :param port: port of target host if log mode is 'tcp' or 'udp'
    :return: wrapped instance
    """
    if log_mode in ('tcp', 'udp') and (host is None or port is None):
        raise ValueError('Host and port of Log Socket should be specified')
    handler = _make_handler(log_mode, host, port)
    # one logger per instance, so that sessions never share handlers
    logger = logging.getLogger('{0}.{1:x}'.format(session.__class__.__name__, id(session)))
    logger.propagate = False
    logger.addHandler(handler)

    for name in methods_to_log:
        method = getattr(session, name, None)
        if method is not None:
            setattr(session, name, _log_wrapper(method, logger))

    # bind logger with instance, so as to close log-handler when session closes
    session._logger = logger
    session._log_handler = handler
    return session
