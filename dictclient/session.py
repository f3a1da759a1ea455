"""
This file include the main interface of dictclient.
A DictSession owns one connection to a DICT server and runs every command as
one synchronous round-trip over it.
"""
import logging
import re
import socket

import rwlock

from dictclient.constants import *
from dictclient.model import Definition, Database, MatchingStrategy, ALL_DATABASES, DEFAULT_STRATEGY
from dictclient.net.parser import build_command, parse_status, quote_word, split_atoms
from dictclient.net.proxy import AbstractProxy, ClientProxy
from dictclient.utils import DictConnectionError, DictProtocolError, SessionClosedError, name_of, unique_by_name

logger = logging.getLogger(DEFAULT_LOGGER_NAME)

_BRACKETED = re.compile(r'<([^<>]*)>')


class DictSession(object):
    """
    Session with a DICT server. The connection is opened by the constructor and
    released by `close()`; in between, each operation writes one command and
    parses the whole reply before another operation may use the connection.
    """

    def __init__(self, host: str, port: int = DEFAULT_PORT, *, timeout=None, encoding=DEFAULT_ENCODING,
                 proxy: AbstractProxy = None):
        """
        :param host: name of the host where the DICT server is running.
        :param port: port number used by the DICT server.
        :param timeout: socket timeout in seconds, None blocks forever.
        :param encoding: encoding of the lines on the wire.
        :param proxy: already connected line transport, host and port are then
                      only kept for logging.
        :raise DictConnectionError: if the host does not exist, the connection
                                    can't be established or the server does
                                    not greet with a 220 banner.
        """
        self._host = host
        self._port = port
        self._lock = rwlock.RWLock()
        self._banner = ''
        self._capabilities = ()
        self._msg_id = None
        if proxy is None:
            proxy = self._connect(host, port, timeout, encoding)
        self._proxy = proxy
        try:
            self._greet()
        except DictConnectionError:
            self._proxy.close()
            self._proxy = None
            raise
        logger.info('Connected to {host}:{port}'.format(host=host, port=port))

    @staticmethod
    def _connect(host, port, timeout, encoding) -> ClientProxy:
        try:
            return ClientProxy.connect_to_server(host, port, timeout=timeout, encoding=encoding)
        except socket.gaierror as error:
            raise DictConnectionError('Unknown host: {0}'.format(host)) from error
        except ConnectionRefusedError as error:
            raise DictConnectionError('Server refused to connect: {0}'.format(host)) from error
        except OSError as error:
            raise DictConnectionError('I/O error during connection to {0}:{1}'.format(host, port)) from error

    def _greet(self):
        try:
            welcome = self._proxy.read_line()
        except OSError as error:
            raise DictConnectionError('I/O error while reading welcome message') from error
        try:
            status = parse_status(welcome)
        except DictProtocolError as error:
            raise DictConnectionError('Invalid welcome message: {0!r}'.format(welcome)) from error
        if status.code != STATUS_BANNER:
            raise DictConnectionError('Invalid welcome message: {0!r}'.format(welcome))
        self._banner = status.text
        # banner ends with `<capabilities> <msg-id>`, both optional in practice
        bracketed = _BRACKETED.findall(welcome)
        if len(bracketed) >= 2:
            self._capabilities = tuple(c for c in bracketed[-2].split('.') if c)
        if bracketed:
            self._msg_id = bracketed[-1]

    def _exchange(self, command: str):
        """
        Guard of one command round-trip. Only one exchange at a time may use
        the connection since replies carry no request identifier. Failures
        from the transport or from malformed lines come out as
        DictProtocolError, chained to their cause.
        """

        class Exchange:
            def __enter__(_self):
                self._lock.writer_lock.acquire()
                if self._proxy is None:
                    self._lock.writer_lock.release()
                    raise SessionClosedError('Session is closed, {0} is not allowed'.format(command))

            def __exit__(_self, exc_type, exc_val, exc_tb):
                self._lock.writer_lock.release()
                if exc_type is not None and issubclass(exc_type, (OSError, ValueError, IndexError)):
                    raise DictProtocolError('Error during {0}: {1}'.format(command, exc_val)) from exc_val
                return False

        return Exchange()

    def _send(self, command: str):
        logger.debug('>>> {0}'.format(command))
        self._proxy.write_line(command)
        return self._read_status()

    def _read_status(self):
        line = self._proxy.read_line()
        logger.debug('<<< {0}'.format(line))
        return parse_status(line)

    @staticmethod
    def _expect(status, *codes):
        if status.code not in codes:
            raise DictProtocolError('Unexpected status {got}, expected {want}'.format(
                got=status.code, want=' or '.join(str(c) for c in codes)))

    def _expect_completion(self):
        status = self._read_status()
        if status.code != STATUS_OK:
            raise DictProtocolError('Completion status should be {ok}, got {got}'.format(ok=STATUS_OK,
                                                                                          got=status.code))

    def _read_block(self):
        """Yield the lines of a textual block up to its terminating period."""
        while True:
            line = self._proxy.read_line()
            if line is None:
                raise DictProtocolError('Connection closed before end of text block')
            if line == DATA_TERMINATOR:
                return
            yield line

    def _read_text(self) -> str:
        return ''.join(line + '\n' for line in self._read_block())

    def get_definitions(self, word: str, database=ALL_DATABASES) -> list:
        """
        Retrieve all definitions of a word.
        :param word: word whose definitions are requested.
        :param database: database (or its name) to search, '*' searches them
                         all and '!' stops at the first database having one.
        :return: list of Definition in the order sent by the server, empty if
                 there is no match or the database is unknown.
        """
        command = build_command('DEFINE', name_of(database), quote_word(word))
        definitions = []
        with self._exchange('DEFINE'):
            status = self._send(command)
            if status.code in (STATUS_NO_MATCH, STATUS_INVALID_DATABASE):
                return definitions
            self._expect(status, STATUS_DEFINITIONS_RETRIEVED)
            count = int(status.atoms[0])
            logger.debug('{n} definitions retrieved'.format(n=count))
            for _ in range(count):
                header = self._read_status()
                self._expect(header, STATUS_WORD_DEFINITION)
                if len(header.atoms) < 2:
                    raise DictProtocolError('Definition header lacks word or database: {0}'.format(header))
                definition = Definition(*header.atoms[:3])
                for line in self._read_block():
                    definition.append_line(line)
                definitions.append(definition)
            self._expect_completion()
        return definitions

    def get_match_list(self, word: str, strategy=DEFAULT_STRATEGY, database=ALL_DATABASES) -> list:
        """
        Retrieve the words matching a pattern.
        :param word: pattern handed to the strategy.
        :param strategy: strategy (or its name) used to match, e.g. prefix, exact.
        :param database: database (or its name), '*' and '!' are accepted.
        :return: matched words without duplicates, in first-seen order.
        """
        command = build_command('MATCH', name_of(database), name_of(strategy), quote_word(word))
        matches = dict()
        with self._exchange('MATCH'):
            status = self._send(command)
            if status.code in (STATUS_INVALID_DATABASE, STATUS_INVALID_STRATEGY, STATUS_NO_MATCH):
                return []
            self._expect(status, STATUS_MATCHES_FOUND)
            for line in self._read_block():
                matches.setdefault(split_atoms(line)[1], None)
            self._expect_completion()
        return list(matches)

    def get_database_list(self) -> dict:
        """:return: databases offered by the server, keyed by name."""
        databases = dict()
        with self._exchange('SHOW DATABASES'):
            status = self._send('SHOW DATABASES')
            if status.code == STATUS_NO_DATABASES:
                return databases
            self._expect(status, STATUS_DATABASES_PRESENT)
            for line in self._read_block():
                atoms = split_atoms(line)
                databases[atoms[0]] = Database(atoms[0], atoms[1])
            self._expect_completion()
        return databases

    def get_strategy_list(self) -> list:
        """:return: matching strategies supported by the server, unique by name."""
        strategies = []
        with self._exchange('SHOW STRATEGIES'):
            status = self._send('SHOW STRATEGIES')
            if status.code == STATUS_NO_STRATEGIES:
                return strategies
            self._expect(status, STATUS_STRATEGIES_PRESENT)
            for line in self._read_block():
                atoms = split_atoms(line)
                strategies.append(MatchingStrategy(atoms[0], atoms[1]))
            self._expect_completion()
        return unique_by_name(strategies)

    def get_database_info(self, database) -> str:
        """:return: the server's description of a database, '' if it is unknown."""
        command = build_command('SHOW INFO', name_of(database))
        with self._exchange('SHOW INFO'):
            status = self._send(command)
            if status.code == STATUS_INVALID_DATABASE:
                return ''
            self._expect(status, STATUS_DATABASE_INFO)
            info = self._read_text()
            self._expect_completion()
        return info

    def get_server_info(self) -> str:
        with self._exchange('SHOW SERVER'):
            status = self._send('SHOW SERVER')
            self._expect(status, STATUS_SERVER_INFO)
            info = self._read_text()
            self._expect_completion()
        return info

    def get_status(self) -> str:
        with self._exchange('STATUS'):
            status = self._send('STATUS')
            self._expect(status, STATUS_SERVER_STATUS)
        return status.text

    def close(self):
        """
        Say QUIT and close the connection. Nothing raised while sending the
        message, reading its reply or closing the socket escapes from here.
        """
        self._lock.writer_lock.acquire()
        try:
            if self._proxy is None:
                return
            proxy, self._proxy = self._proxy, None
            try:
                proxy.write_line('QUIT')
                reply = proxy.read_line()
                if reply is not None:
                    logger.debug('Server reply to QUIT: {0}'.format(reply))
            except Exception as error:
                logger.warning('Exception during close: {0}'.format(error))
            finally:
                try:
                    proxy.close()
                except Exception as error:
                    logger.warning('Exception while closing socket: {0}'.format(error))
            logger.info('Connection to {host}:{port} closed'.format(host=self._host, port=self._port))
            # release the handler attached by log_wrapper, if any
            if hasattr(self, '_log_handler'):
                self._logger.removeHandler(self._log_handler)
                self._log_handler.close()
        finally:
            self._lock.writer_lock.release()

    @property
    def is_open(self) -> bool:
        self._lock.reader_lock.acquire()
        try:
            return self._proxy is not None
        finally:
            self._lock.reader_lock.release()

    @property
    def banner(self) -> str:
        """Greeting text sent by the server, without its 220 code."""
        return self._banner

    @property
    def capabilities(self) -> tuple:
        return self._capabilities

    @property
    def msg_id(self):
        return self._msg_id

    @property
    def address(self) -> tuple:
        return self._host, self._port

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return '<{cls} {host}:{port} {state}>'.format(cls=self.__class__.__name__, host=self._host,
                                                      port=self._port,
                                                      state='open' if self._proxy is not None else 'closed')
