"""
Интеграционные тесты уведомителя на базе watchdog (реальная файловая система)
"""
import threading
import time

import pytest

from aiwatch.application.comments import CommentWatcher, WatcherCallbacks
from aiwatch.domain.comments import NotifierOptions
from aiwatch.infrastructure.notifiers import WatchdogNotifier

TIMEOUT = 10


class Recorder:
    """Собирает события подписки и позволяет их дождаться"""

    def __init__(self):
        self.events = []
        self.changed = threading.Event()
        self.ready = threading.Event()
        self.failed = threading.Event()

    def on_change(self, path):
        self.events.append(("change", path))
        self.changed.set()

    def on_ready(self):
        self.events.append(("ready",))
        self.ready.set()

    def on_error(self, error):
        self.events.append(("error", error))
        self.failed.set()

    def attach(self, subscription):
        subscription.on("change", self.on_change).on("ready", self.on_ready).on("error", self.on_error)
        return subscription

    def changes(self):
        return [event[1] for event in self.events if event[0] == "change"]


@pytest.fixture
def options():
    return NotifierOptions(ignored=[r"ignored_dir"], ignore_initial=True, stability_threshold=100, poll_interval=20)


@pytest.fixture
def recorder():
    return Recorder()


class TestWatchdogNotifier:

    def test_ready_emitted(self, tmp_path, options, recorder):
        subscription = recorder.attach(WatchdogNotifier().start_watching(str(tmp_path), options))
        try:
            assert recorder.ready.wait(TIMEOUT)
            assert recorder.changes() == []
        finally:
            subscription.close()

    def test_initial_files_before_ready(self, tmp_path, options, recorder):
        (tmp_path / "a.py").write_text("# AI: hello\n")
        (tmp_path / "ignored_dir").mkdir()
        (tmp_path / "ignored_dir" / "b.py").write_text("# AI: skip\n")
        options.ignore_initial = False

        subscription = recorder.attach(WatchdogNotifier().start_watching(str(tmp_path), options))
        try:
            assert recorder.ready.wait(TIMEOUT)
            assert recorder.events[0] == ("change", str(tmp_path / "a.py"))
            assert recorder.events[-1] == ("ready",)
            assert all("ignored_dir" not in path for path in recorder.changes())
        finally:
            subscription.close()

    def test_modification_debounced_to_one_change(self, tmp_path, options, recorder):
        target = tmp_path / "c.ts"
        target.write_text("")
        subscription = recorder.attach(WatchdogNotifier().start_watching(str(tmp_path), options))
        try:
            assert recorder.ready.wait(TIMEOUT)
            for i in range(3):
                target.write_text(f"// AI: step {i}\n")

            assert recorder.changed.wait(TIMEOUT)
            time.sleep(0.5)
            assert recorder.changes() == [str(target)]
        finally:
            subscription.close()

    def test_missing_path_reports_error(self, tmp_path, options, recorder):
        subscription = recorder.attach(WatchdogNotifier().start_watching(str(tmp_path / "missing"), options))
        try:
            assert recorder.failed.wait(TIMEOUT)
            assert isinstance(recorder.events[0][1], OSError)
        finally:
            subscription.close()

    def test_no_events_after_close(self, tmp_path, options, recorder):
        subscription = recorder.attach(WatchdogNotifier().start_watching(str(tmp_path), options))
        assert recorder.ready.wait(TIMEOUT)
        subscription.close()

        (tmp_path / "late.ts").write_text("// AI! late\n")
        time.sleep(0.5)

        assert subscription.closed is True
        assert recorder.changes() == []

    def test_listener_failure_does_not_stop_dispatcher(self, tmp_path, options, recorder):
        options.ignore_initial = False
        (tmp_path / "one.ts").write_text("// AI: one\n")
        (tmp_path / "two.ts").write_text("// AI: two\n")
        calls = []

        def broken(path):
            calls.append(path)
            raise RuntimeError("listener failed")

        subscription = WatchdogNotifier().start_watching(str(tmp_path), options)
        subscription.on("change", broken)
        recorder.attach(subscription)
        try:
            assert recorder.ready.wait(TIMEOUT)
            assert len(calls) == 2
        finally:
            subscription.close()


class TestWatcherWithWatchdog:
    """CommentWatcher поверх реального уведомителя"""

    def test_trigger_end_to_end(self, tmp_path):
        received = []
        triggered = threading.Event()
        ready = threading.Event()

        def on_trigger(blocks):
            received.extend(blocks)
            triggered.set()

        watcher = CommentWatcher(
            WatchdogNotifier(),
            WatcherCallbacks(on_ai_trigger=on_trigger, on_ready=ready.set),
        )
        watcher.options.stability_threshold = 100
        watcher.options.poll_interval = 20
        watcher.watch(str(tmp_path))
        try:
            assert ready.wait(TIMEOUT)
            (tmp_path / "app.py").write_text("x = 1\n# AI! make this faster\n")

            assert triggered.wait(TIMEOUT)
            assert received[0].file_path == str(tmp_path / "app.py")
            assert received[0].start_line == 2
        finally:
            watcher.close()

    def test_root_under_ignored_directory_name(self, tmp_path):
        root = tmp_path / "build" / "proj"
        root.mkdir(parents=True)
        triggered = threading.Event()
        ready = threading.Event()

        watcher = CommentWatcher(
            WatchdogNotifier(),
            WatcherCallbacks(on_ai_trigger=lambda blocks: triggered.set(), on_ready=ready.set),
        )
        watcher.options.stability_threshold = 100
        watcher.options.poll_interval = 20
        watcher.watch(str(root))
        try:
            assert ready.wait(TIMEOUT)
            (root / "main.py").write_text("# AI! fix it\n")

            assert triggered.wait(TIMEOUT)
        finally:
            watcher.close()
