"""Signal handling for the workspace-tree CLI.

The CLI stops writing as soon as the reader goes away (SIGPIPE) or the user
presses Ctrl+C (SIGINT), and then exits with the shell's conventional status
for that signal. Signals the platform does not define are skipped.
"""

import atexit
import os
import signal
import sys
from types import FrameType
from typing import Any, Dict, List, Optional, Tuple

# Earlier entries win when more than one signal has arrived
EXIT_STATUSES: Tuple[Tuple[str, int], ...] = (("SIGPIPE", 141), ("SIGINT", 130))


class SignalHandler:
    """Records interrupting signals and maps them to an exit status.

    Handling a signal puts the previous handler back, so a repeat of the same
    signal takes its normal action.

    Attributes:
        exit_statuses: Exit status for each handled signal number, in precedence order.
        received: Signal numbers received so far, in arrival order.
    """

    def __init__(self) -> None:
        self.exit_statuses: Dict[int, int] = {}
        for name, status in EXIT_STATUSES:
            signum = getattr(signal, name, None)
            if signum is not None:
                self.exit_statuses[int(signum)] = status

        self.received: List[int] = []
        self._previous: Dict[int, Any] = {signum: signal.getsignal(signum) for signum in self.exit_statuses}

    def install(self) -> None:
        for signum in self.exit_statuses:
            signal.signal(signum, self.handle)

    def handle(self, signum: int, frame: Optional[FrameType]) -> None:
        if signum not in self.received:
            self.received.append(signum)
        # getsignal() gives None for handlers not installed from Python
        previous = self._previous.get(signum)
        signal.signal(signum, previous if previous is not None else signal.SIG_DFL)

    @property
    def interrupted(self) -> bool:
        return bool(self.received)

    def exit_code(self) -> Optional[int]:
        """Exit status for the highest-precedence received signal, or None."""
        for signum, status in self.exit_statuses.items():
            if signum in self.received:
                return status
        return None


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    signal_handler.install()


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    Runs at exit, so the interpreter's final flush of a closed pipe does not
    report a second error.
    """
    if not signal_handler.interrupted:
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, sys.stdout.fileno())
    finally:
        os.close(devnull)


atexit.register(cleanup)
