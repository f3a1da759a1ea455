"""
Values exchanged with a DICT server.
- Database: a dictionary source offered by the server.
- MatchingStrategy: an algorithm the server uses to find approximate matches.
- Definition: one definition of a word, as retrieved from one database.
"""

__all__ = ['Database', 'MatchingStrategy', 'Definition', 'ALL_DATABASES', 'FIRST_MATCH', 'DEFAULT_STRATEGY']


class NamedEntry(object):
    """
    Immutable (name, description) pair whose identity is its name only, so that
    two entries announced with different descriptions still compare equal.
    """
    __slots__ = ('_name', '_description')

    def __init__(self, name: str, description: str = ''):
        if not name:
            raise ValueError('{cls} name should not be empty'.format(cls=self.__class__.__name__))
        self._name = name
        self._description = description

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value):
        raise RuntimeError("Can't rename a {cls}.".format(cls=self.__class__.__name__))

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value):
        raise RuntimeError("Can't change description of a {cls}.".format(cls=self.__class__.__name__))

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self._name == other._name
        return NotImplemented

    def __hash__(self):
        return hash((self.__class__.__name__, self._name))

    def __str__(self):
        return self._name

    def __repr__(self):
        return '{cls}({name!r}, {desc!r})'.format(cls=self.__class__.__name__, name=self._name,
                                                  desc=self._description)


class Database(NamedEntry):
    __slots__ = []


class MatchingStrategy(NamedEntry):
    __slots__ = []


# special databases understood by every server
ALL_DATABASES = Database('*', 'All databases')
FIRST_MATCH = Database('!', 'First database with a match')

# '.' lets the server pick its own default strategy
DEFAULT_STRATEGY = MatchingStrategy('.', 'Server default strategy')


class Definition(object):
    """
    Accumulates the body of one definition while it is read from the server.
    Created from a `151` header, it should be treated as read-only once its
    terminating line has been consumed.
    """
    __slots__ = ('_word', '_database', '_database_description', '_body')

    def __init__(self, word: str, database: str, database_description: str = ''):
        self._word = word
        self._database = database
        self._database_description = database_description
        self._body = []

    @property
    def word(self) -> str:
        return self._word

    @property
    def database(self) -> str:
        return self._database

    @property
    def database_description(self) -> str:
        return self._database_description

    @property
    def body(self) -> tuple:
        return tuple(self._body)

    @property
    def text(self) -> str:
        return '\n'.join(self._body)

    def append_line(self, line: str):
        self._body.append(line)

    def __eq__(self, other):
        if isinstance(other, Definition):
            return (self._word, self._database, self._body) == (other._word, other._database, other._body)
        return NotImplemented

    __hash__ = None

    def __len__(self):
        return len(self._body)

    def __repr__(self):
        return 'Definition({word!r}, {db!r}, lines={n})'.format(word=self._word, db=self._database,
                                                                 n=len(self._body))
