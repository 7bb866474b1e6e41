"""
Cooperative Cancellation and Progress Reporting

Long-running loops poll a CancellationToken at a fixed cadence instead of
consulting a global abort flag. Progress is shown with tqdm.
"""
import threading
from typing import Optional

from tqdm import tqdm


class CancellationToken:
    """
    Abort signal shared between the caller and a running sampler.

    The caller (or another thread) calls cancel(); the sampler checks
    is_cancelled every few iterations and stops cleanly.
    """

    def __init__(self, limit: Optional[int] = None):
        """
        Args:
            limit: Optional number of polls after which the token
                cancels itself (useful for budgeted runs)
        """
        self._event = threading.Event()
        self.limit = limit
        self.polls = 0

    def cancel(self):
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def poll(self) -> bool:
        """Record one check and return True if the run must stop"""
        self.polls += 1
        if self.limit is not None and self.polls > self.limit:
            self.cancel()
        return self.is_cancelled


def should_stop(token: Optional[CancellationToken]) -> bool:
    """Poll an optional token"""
    return token is not None and token.poll()


def progress_bar(total: int, progress: bool = True, desc: Optional[str] = None) -> tqdm:
    """tqdm bar that is silent when progress is False"""
    return tqdm(total=total, desc=desc, disable=not progress, leave=False)
