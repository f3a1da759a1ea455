"""
  This include the exceptions raised by dictclient and some helper-functions.
"""


class DictConnectionError(Exception):
    """Base error: the server can't be reached or the session can't be used."""
    pass


class DictProtocolError(DictConnectionError):
    """A reply did not match what the running command expects."""
    pass


class SessionClosedError(DictConnectionError):
    pass


def name_of(item) -> str:
    """
    Database and strategy arguments may be passed either as model objects
    or directly as their protocol names.
    """
    if isinstance(item, str):
        return item
    try:
        return item.name
    except AttributeError:
        raise TypeError('{0!r} is neither a name nor a named entry'.format(item))


def unique_by_name(entries) -> list:
    """
    Collapse entries sharing a name: the first-seen position is kept while the
    last-seen entry wins.
    """
    seen = dict()
    for entry in entries:
        seen[entry.name] = entry
    return list(seen.values())
