import pytest

from dictclient.constants import METHODS_TO_LOG
from dictclient.wrapper import log_wrapper


def test_wrapper_logs_calls(session_for, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session, _ = session_for('552 no match', '210 status ok', '221 bye')
    other, _ = session_for()
    session = log_wrapper(session, METHODS_TO_LOG)

    assert session.get_definitions('xyzzy', 'wn') == []
    assert session.get_status() == 'status ok'
    # only the wrapped instance is affected
    assert 'get_status' not in vars(other)
    session.close()

    log = (tmp_path / 'log.log').read_text()
    assert "Called: get_definitions('xyzzy','wn')" in log
    assert 'Called: get_status()' in log
    assert session._logger.handlers == []


def test_wrapper_logs_failures(session_for, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session, _ = session_for('500 unknown command')
    session = log_wrapper(session, ('get_strategy_list',))
    with pytest.raises(Exception):
        session.get_strategy_list()
    session.close()
    assert 'DictProtocolError' in (tmp_path / 'log.log').read_text()


def test_wrapper_needs_log_target(session_for):
    session, _ = session_for()
    with pytest.raises(ValueError):
        log_wrapper(session, METHODS_TO_LOG, log_mode='udp')
    with pytest.raises(ValueError):
        log_wrapper(session, METHODS_TO_LOG, log_mode='syslog')


def test_wrapped_sessions_keep_their_own_handlers(session_for, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    first, _ = session_for('221 bye')
    second, _ = session_for('552 no match', '552 no match')
    first = log_wrapper(first, METHODS_TO_LOG)
    second = log_wrapper(second, METHODS_TO_LOG)
    assert first._logger is not second._logger

    second.get_definitions('one')
    first.close()
    second.get_definitions('two')
    second.close()

    log = (tmp_path / 'log.log').read_text()
    assert log.count("Called: get_definitions('one')") == 1
    assert "Called: get_definitions('two')" in log
