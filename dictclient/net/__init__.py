from dictclient.net.parser import split_atoms, quote_word, build_command, parse_status, StatusLine
from dictclient.net.proxy import AbstractProxy, ClientProxy

__all__ = ('split_atoms', 'quote_word', 'build_command', 'parse_status', 'StatusLine', 'AbstractProxy',
           'ClientProxy')
