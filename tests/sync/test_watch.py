"""
Tests for the Watch Loop
========================

The change stream is replaced by canned paths except in the end-to-end test,
which feeds watchdog events into a real ChangeStream.
"""

import subprocess
from unittest.mock import MagicMock, call, patch

import pytest
from watchdog.events import FileModifiedEvent

from dockrsync.core.transport import TransportBuilder
from dockrsync.errors import ContainerNotFound
from dockrsync.file_monitor import ChangeStream
from dockrsync.sync.watch import WatchLoop, to_relative, transfer_target


class FakeStream:
    """Yields canned paths; raises KeyboardInterrupt when it meets one."""

    def __init__(self, items):
        self.items = items
        self.entered = False
        self.exited = False

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.exited = True

    def __iter__(self):
        for item in self.items:
            if item is KeyboardInterrupt:
                raise KeyboardInterrupt
            yield item


@pytest.fixture
def mock_services_subprocess():
    with patch('dockrsync.core.services.subprocess') as mock:
        mock.PIPE = subprocess.PIPE
        mock.run.return_value = MagicMock(stdout="abc123\n", stderr="", returncode=0)
        yield mock


@pytest.fixture
def mock_rsync():
    with patch('dockrsync.sync.rsync.subprocess') as mock:
        mock.run.return_value = MagicMock(returncode=0)
        yield mock


@pytest.fixture
def transport():
    return TransportBuilder().build("abc123")


def transferred(mock_rsync) -> list[str]:
    """The path argument of every rsync call."""
    return [c[0][0][c[0][0].index("--relative") + 1] for c in mock_rsync.run.call_args_list]


def test_to_relative(project_root):
    assert to_relative(project_root / "src" / "app.py", project_root) == "./src/app.py"
    assert to_relative(str(project_root / "README.md"), project_root) == "./README.md"
    assert to_relative(project_root, project_root) == "."


def test_transfer_target_existing_path(project_root):
    (project_root / "src").mkdir()
    (project_root / "src" / "app.py").write_text("print('hi')")
    assert transfer_target("./src/app.py", project_root, delete_enabled=True) == "./src/app.py"


def test_transfer_target_deleted_path_uses_parent(project_root):
    (project_root / "src").mkdir()
    assert transfer_target("./src/gone.py", project_root, delete_enabled=True) == "./src"
    assert transfer_target("./gone.py", project_root, delete_enabled=True) == "."


def test_transfer_target_without_delete_keeps_path(project_root):
    assert transfer_target("./src/gone.py", project_root, delete_enabled=False) == "./src/gone.py"


def test_handle_issues_one_transfer(make_settings, make_synchronizer, notifier, project_root, transport, mock_rsync):
    (project_root / "app.py").write_text("x = 1")
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web")), notifier)

    assert loop.handle(str(project_root / "app.py"), transport) is True

    assert transferred(mock_rsync) == ["./app.py"]
    assert notifier.mock_calls == [call.busy(), call.idle()]


def test_handle_deleted_file_with_delete_enabled(make_settings, make_synchronizer, notifier, project_root,
                                                 transport, mock_rsync):
    (project_root / "lib").mkdir()
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web", DELETE_FLAG="--delete")), notifier)

    loop.handle(str(project_root / "lib" / "removed.py"), transport)

    command = mock_rsync.run.call_args[0][0]
    assert transferred(mock_rsync) == ["./lib"]
    assert "--delete" in command


def test_handle_deleted_file_with_delete_disabled(make_settings, make_synchronizer, notifier, project_root,
                                                  transport, mock_rsync):
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web")), notifier)
    loop.handle(str(project_root / "lib" / "removed.py"), transport)
    assert transferred(mock_rsync) == ["./lib/removed.py"]


def test_run_processes_events_in_order(make_settings, make_synchronizer, notifier, project_root,
                                       mock_services_subprocess, mock_rsync):
    for name in ("a.txt", "b.txt", "c.txt"):
        (project_root / name).write_text(name)
    stream = FakeStream([str(project_root / name) for name in ("b.txt", "a.txt", "c.txt")])
    factory = MagicMock(return_value=stream)
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web", WATCH_LATENCY="0.5")),
                     notifier, stream_factory=factory)

    loop.run()

    factory.assert_called_once_with(project_root, latency=0.5)
    assert stream.entered and stream.exited
    assert transferred(mock_rsync) == ["./b.txt", "./a.txt", "./c.txt"]
    assert all(c[1]["cwd"] == project_root for c in mock_rsync.run.call_args_list)


def test_run_survives_failed_transfer(make_settings, make_synchronizer, notifier, project_root,
                                      mock_services_subprocess, mock_rsync):
    mock_rsync.run.side_effect = [MagicMock(returncode=12), MagicMock(returncode=0)]
    stream = FakeStream([str(project_root / "one"), str(project_root / "two")])
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web")), notifier,
                     stream_factory=lambda root, latency: stream)

    loop.run()

    assert mock_rsync.run.call_count == 2
    assert notifier.mock_calls == [
        call.idle(),
        call.busy(), call.error(), call.idle(),
        call.busy(), call.idle(),
    ]


def test_run_interrupt_sends_shutdown(make_settings, make_synchronizer, notifier, project_root,
                                      mock_services_subprocess, mock_rsync):
    stream = FakeStream([str(project_root / "one"), KeyboardInterrupt, str(project_root / "never")])
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web")), notifier,
                     stream_factory=lambda root, latency: stream)

    loop.run()

    assert transferred(mock_rsync) == ["./one"]
    assert notifier.mock_calls[-1] == call.shutdown()
    assert stream.exited


def test_run_fails_before_watching_without_container(make_settings, make_synchronizer, notifier,
                                                     mock_services_subprocess, mock_rsync):
    mock_services_subprocess.run.return_value = MagicMock(stdout="", stderr="", returncode=0)
    factory = MagicMock()
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web")), notifier, stream_factory=factory)

    with pytest.raises(ContainerNotFound):
        loop.run()

    factory.assert_not_called()
    mock_rsync.run.assert_not_called()


def test_burst_of_events_gives_one_transfer(make_settings, make_synchronizer, notifier, project_root,
                                            mock_services_subprocess, mock_rsync):
    """Three rapid events for one file are coalesced by the stream into one transfer."""
    target = project_root / "app.py"
    target.write_text("x = 1")
    stream = ChangeStream(project_root, latency=0.2)
    for _ in range(3):
        stream.handler.dispatch(FileModifiedEvent(str(target)))
    # Ends iteration once the queued events are delivered.
    stream.stop()
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web")), notifier,
                     stream_factory=lambda root, latency: stream)

    loop.run()

    assert transferred(mock_rsync) == ["./app.py"]


def test_run_creates_both_exclude_lists(make_settings, make_synchronizer, notifier, project_paths,
                                        mock_services_subprocess, mock_rsync):
    loop = WatchLoop(make_synchronizer(make_settings(DEFAULT_SERVICE="web")), notifier,
                     stream_factory=lambda root, latency: FakeStream([]))

    loop.run()

    assert project_paths.ignore_file.read_text() == ".*\n"
    assert project_paths.fetch_ignore_file.read_text() == ""
