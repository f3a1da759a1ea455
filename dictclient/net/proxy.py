import socket
import logging
from abc import ABCMeta, abstractmethod

from dictclient.constants import DEFAULT_LOGGER_NAME, DEFAULT_ENCODING, LINE_TERMINATOR

logger = logging.getLogger(DEFAULT_LOGGER_NAME)


class AbstractProxy(metaclass=ABCMeta):
    """
    Line-oriented transport a session talks through. Sessions only rely on
    these three calls, so any object providing them may stand in for a socket.
    """

    @abstractmethod
    def read_line(self):
        """Next line without its terminator, or None once the stream has ended."""
        pass

    @abstractmethod
    def write_line(self, line: str):
        """Write one line and flush it at once."""
        pass

    @abstractmethod
    def close(self):
        pass


class ClientProxy(AbstractProxy):
    """Line transport bound to a connected TCP socket."""

    def __init__(self, sock: socket.socket, encoding: str = DEFAULT_ENCODING):
        self._sock = sock
        self._encoding = encoding
        self._rfile = sock.makefile('rb')
        self._wfile = sock.makefile('wb')
        self._closed = False

    @classmethod
    def connect_to_server(cls, host: str, port: int, timeout=None, encoding: str = DEFAULT_ENCODING):
        """
        Resolve and connect to host:port. Socket errors propagate untouched so
        that callers can tell an unknown host from a refused connection.
        """
        sock = socket.create_connection((host, port), timeout=timeout)
        logger.debug('socket connected to {host}:{port}'.format(host=host, port=port))
        return cls(sock, encoding=encoding)

    def read_line(self):
        raw = self._rfile.readline()
        if not raw:
            return None
        # undecodable bytes should not abort a whole block
        return raw.decode(self._encoding, errors='replace').rstrip('\r\n')

    def write_line(self, line: str):
        self._wfile.write((line + LINE_TERMINATOR).encode(self._encoding))
        self._wfile.flush()

    def close(self):
        if self._closed:
            return
        self._closed = True
        try:
            self._wfile.close()
        except OSError as error:
            # unflushed data on a dead peer, nothing left to save
            logger.debug('error while closing write stream: {0}'.format(error))
        self._rfile.close()
        self._sock.close()

    @property
    def closed(self) -> bool:
        return self._closed
