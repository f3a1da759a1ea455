"""
Parsers for lines transported through network.
A DICT client sends one command per line and the server answers with lines
led by a three-digit status code, the format works like this:
<code> <atom> <atom> ...
where an atom is either a run of non-blank characters or a double-quoted
string which may contain blanks. Textual blocks following a preliminary
status are plain lines closed by a line holding a single period.
"""
from collections import namedtuple

from dictclient.constants import MAX_COMMAND_LENGTH, LINE_TERMINATOR
from dictclient.utils import DictProtocolError

__all__ = ['StatusLine', 'split_atoms', 'quote_word', 'build_command', 'parse_status']

StatusLine = namedtuple('StatusLine', [
    'code',  # three-digit status code as int
    'atoms',  # atoms following the code
    'text',  # raw text following the code
])

_QUOTE = '"'
_ESCAPE = '\\'


def split_atoms(line: str) -> list:
    """
    Split a line on whitespace, keeping each double-quoted span as one atom
    and dropping its quotes. Inside quotes a backslash escapes the next char.
    An unterminated quote swallows the rest of the line.
    """
    atoms = []
    size = len(line)
    i = 0
    while i < size:
        if line[i].isspace():
            i += 1
            continue
        if line[i] == _QUOTE:
            i += 1
            chars = []
            while i < size and line[i] != _QUOTE:
                if line[i] == _ESCAPE and i + 1 < size:
                    i += 1
                chars.append(line[i])
                i += 1
            i += 1  # skip closing quote
            atoms.append(''.join(chars))
        else:
            start = i
            while i < size and not line[i].isspace():
                i += 1
            atoms.append(line[start:i])
    return atoms


def quote_word(word: str) -> str:
    """Wrap a free-text argument in double quotes when it holds blanks."""
    if word and not any(c.isspace() for c in word):
        return word
    escaped = word.replace(_ESCAPE, _ESCAPE * 2).replace(_QUOTE, _ESCAPE + _QUOTE)
    return _QUOTE + escaped + _QUOTE


def build_command(*tokens) -> str:
    command = ' '.join(tokens)
    if len(command) + len(LINE_TERMINATOR) > MAX_COMMAND_LENGTH:
        raise ValueError('Command too long: {0} chars'.format(len(command)))
    return command


def parse_status(line) -> StatusLine:
    """
    :param line: raw line read from server, None if the stream has ended.
    :return: status code, the atoms following it and their raw text.
    """
    if line is None:
        raise DictProtocolError('Connection closed while waiting for a status line')
    atoms = split_atoms(line)
    if not atoms or len(atoms[0]) != 3 or not atoms[0].isdigit():
        raise DictProtocolError('Malformed status line: {0!r}'.format(line))
    return StatusLine(int(atoms[0]), atoms[1:], line.lstrip()[3:].strip())
