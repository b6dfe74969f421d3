import signal

import pytest

from battery_watcher import main as main_mod
from battery_watcher.config import WatcherConfig
from battery_watcher.main import BatteryWatcherApp, WatcherState
from battery_watcher.monitor import BatteryReading, BatteryUnavailableError, ChargeStatus


class FakePoller:
    def __init__(self, readings, on_poll=None):
        self.readings = list(readings)
        self.on_poll = on_poll
        self.calls = 0

    def poll(self):
        self.calls += 1
        if self.on_poll:
            self.on_poll()
        return self.readings.pop(0) if self.readings else None


class FakeDispatcher:
    def __init__(self):
        self.sent = []

    def send(self, notification):
        self.sent.append(notification)


def make_app(readings, on_poll=None):
    poller = FakePoller(readings)
    dispatcher = FakeDispatcher()
    app = BatteryWatcherApp(WatcherConfig(), poller=poller, dispatcher=dispatcher)
    poller.on_poll = on_poll(app) if on_poll else None
    return app, poller, dispatcher


def test_run_once_dispatches_notifications():
    app, _, dispatcher = make_app([BatteryReading(0.08, ChargeStatus.DISCHARGING)])

    app.run_once()

    assert [n.title for n in dispatcher.sent] == ["Charger Disconnected", "Critical Battery"]
    assert app.tracked.last_capacity_tier == "critical"


def test_run_once_skips_missing_reading():
    app, poller, dispatcher = make_app([])

    app.run_once()

    assert poller.calls == 1
    assert dispatcher.sent == []
    assert app.tracked.last_charge_status == ""


def test_loop_stops_after_shutdown_requested(capsys):
    app, poller, dispatcher = make_app(
        [BatteryReading(0.50, ChargeStatus.CHARGING)],
        on_poll=lambda app: app.shutdown_event.set,
    )

    app.run()

    assert poller.calls == 1
    assert len(dispatcher.sent) == 1
    assert app.state is WatcherState.STOPPED
    assert capsys.readouterr().out.count("Exiting program. Goodbye!") == 1


def test_loop_never_polls_when_already_cancelled(capsys):
    app, poller, _ = make_app([])
    app.shutdown_event.set()

    app.run()

    assert poller.calls == 0
    assert capsys.readouterr().out == "Exiting program. Goodbye!\n"


def test_signal_handler_requests_shutdown(capsys):
    app, _, _ = make_app([])

    app._signal_handler(signal.SIGINT, None)

    assert app.shutdown_event.is_set()
    assert "Received Ctrl+C, exiting gracefully..." in capsys.readouterr().out


def test_signal_handlers_restored_after_run():
    before = signal.getsignal(signal.SIGINT)
    app, _, _ = make_app([])
    app.shutdown_event.set()

    app.run()

    assert signal.getsignal(signal.SIGINT) == before


def test_main_exits_nonzero_on_startup_failure(monkeypatch, capsys):
    def failing_app(config):
        raise BatteryUnavailableError("Battery status is not supported on this platform")

    monkeypatch.setattr(main_mod, "BatteryWatcherApp", failing_app)

    with pytest.raises(SystemExit) as exc:
        main_mod.main([])

    assert exc.value.code == 1
    assert "Fatal error: Battery status is not supported" in capsys.readouterr().err


def test_main_exits_zero_after_graceful_run(monkeypatch):
    seen = {}

    class StubApp:
        def __init__(self, config):
            seen["config"] = config

        def run(self):
            seen["ran"] = True

    monkeypatch.setattr(main_mod, "BatteryWatcherApp", StubApp)

    with pytest.raises(SystemExit) as exc:
        main_mod.main(["--debug"])

    assert exc.value.code == 0
    assert seen["ran"]
    assert seen["config"].get("log_level") == "DEBUG"
    assert seen["config"].get("poll_interval_seconds") == 1
