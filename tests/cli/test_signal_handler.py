"""Unit tests for the signal handler module."""

import os
import signal
from unittest.mock import MagicMock, patch

import pytest

from workspace_tree.cli.signal_handler import SignalHandler, cleanup, setup_signal_handling, signal_handler

SIGPIPE = getattr(signal, "SIGPIPE", None)


@pytest.fixture
def mock_signal():
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """A SignalHandler separate from the module singleton."""
    return SignalHandler()


def test_initial_state(fresh_signal_handler):
    assert not fresh_signal_handler.interrupted
    assert fresh_signal_handler.exit_code() is None
    assert fresh_signal_handler.exit_statuses[signal.SIGINT] == 130


def test_sigint(fresh_signal_handler, mock_signal):
    previous = signal.getsignal(signal.SIGINT)

    fresh_signal_handler.handle(signal.SIGINT, None)

    assert fresh_signal_handler.received == [signal.SIGINT]
    assert fresh_signal_handler.interrupted
    assert fresh_signal_handler.exit_code() == 130
    mock_signal.assert_called_once_with(signal.SIGINT, previous)


@pytest.mark.skipif(SIGPIPE is None, reason="SIGPIPE not available on this platform")
def test_sigpipe(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle(SIGPIPE, None)

    assert fresh_signal_handler.exit_code() == 141


@pytest.mark.skipif(SIGPIPE is None, reason="SIGPIPE not available on this platform")
def test_sigpipe_takes_precedence(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle(signal.SIGINT, None)
    fresh_signal_handler.handle(SIGPIPE, None)

    assert fresh_signal_handler.received == [signal.SIGINT, SIGPIPE]
    assert fresh_signal_handler.exit_code() == 141


def test_repeated_signal_recorded_once(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle(signal.SIGINT, None)
    fresh_signal_handler.handle(signal.SIGINT, None)

    assert fresh_signal_handler.received == [signal.SIGINT]


def test_unknown_previous_handler_restores_default(fresh_signal_handler, mock_signal):
    fresh_signal_handler._previous[signal.SIGINT] = None

    fresh_signal_handler.handle(signal.SIGINT, None)

    mock_signal.assert_called_once_with(signal.SIGINT, signal.SIG_DFL)


def test_setup_signal_handling(mock_signal):
    setup_signal_handling()

    installed = {call.args[0]: call.args[1] for call in mock_signal.call_args_list}
    assert installed[signal.SIGINT] == signal_handler.handle
    if SIGPIPE is not None:
        assert installed[SIGPIPE] == signal_handler.handle


def test_cleanup_without_signal():
    with patch("workspace_tree.cli.signal_handler.signal_handler") as mock_handler, patch(
        "workspace_tree.cli.signal_handler.os"
    ) as mock_os:
        mock_handler.interrupted = False
        cleanup()
    mock_os.dup2.assert_not_called()


def test_cleanup_after_signal():
    with patch("workspace_tree.cli.signal_handler.signal_handler") as mock_handler, patch(
        "workspace_tree.cli.signal_handler.os", autospec=True
    ) as mock_os, patch("workspace_tree.cli.signal_handler.sys") as mock_sys:
        mock_handler.interrupted = True
        mock_os.open.return_value = 123
        mock_os.devnull = os.devnull
        mock_os.O_WRONLY = os.O_WRONLY
        mock_sys.stdout = MagicMock()
        mock_sys.stdout.fileno.return_value = 1

        cleanup()

    mock_os.open.assert_called_once_with(os.devnull, os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)
    mock_os.close.assert_called_once_with(123)
