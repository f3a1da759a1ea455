import pytest

from dictclient.net.proxy import AbstractProxy
from dictclient.session import DictSession


class ScriptedProxy(AbstractProxy):
    """Replays canned server lines and records what the client writes."""

    def __init__(self, lines, fail_on_write=False):
        self.lines = list(lines)
        self.sent = []
        self.closed = False
        self.fail_on_write = fail_on_write

    def read_line(self):
        if not self.lines:
            return None
        line = self.lines.pop(0)
        if isinstance(line, Exception):
            raise line
        return line

    def write_line(self, line: str):
        if self.fail_on_write:
            raise BrokenPipeError('peer went away')
        self.sent.append(line)

    def close(self):
        self.closed = True


BANNER = '220 dict.example.org dictd 1.12.1 <auth.mime> <1234.5678@dict.example.org>'


@pytest.fixture
def session_for():
    """Build a session greeted by BANNER which then replays `lines`."""

    def build(*lines, **kwargs):
        proxy = ScriptedProxy((BANNER,) + lines, **kwargs)
        return DictSession('dict.example.org', proxy=proxy), proxy

    return build
