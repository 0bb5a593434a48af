import threading

import pytest

from cetatenie.app import main, run_checker


class _CountingChecker:
    def __init__(self, stop_event, stop_after, failures=0):
        self.calls = 0
        self._stop_event = stop_event
        self._stop_after = stop_after
        self._failures = failures

    def check_all_subscriptions(self):
        self.calls += 1
        if self.calls >= self._stop_after:
            self._stop_event.set()
        if self.calls <= self._failures:
            raise RuntimeError("boom")


def test_run_checker_runs_once_when_already_stopped():
    stop_event = threading.Event()
    stop_event.set()
    checker = _CountingChecker(stop_event, stop_after=100)
    run_checker(checker, stop_event, interval=0)
    assert checker.calls == 1


def test_run_checker_repeats_until_stopped():
    stop_event = threading.Event()
    checker = _CountingChecker(stop_event, stop_after=3)
    run_checker(checker, stop_event, interval=0)
    assert checker.calls == 3


def test_run_checker_survives_errors():
    stop_event = threading.Event()
    checker = _CountingChecker(stop_event, stop_after=2, failures=1)
    run_checker(checker, stop_event, interval=0)
    assert checker.calls == 2


def test_main_fails_without_token(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    db_path = tmp_path / "data.db"
    assert main(["--db", str(db_path)]) == 1
    assert db_path.exists()
    out = capsys.readouterr().out
    assert "Starting application..." in out
    assert "TELEGRAM_BOT_TOKEN" in out


def test_main_fails_when_database_cannot_open(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    bad_path = tmp_path / "missing" / "nested" / "data.db"
    assert main(["--db", str(bad_path)]) == 1
    assert "Failed to initialize database" in capsys.readouterr().out


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit):
        main(["--no-such-option"])