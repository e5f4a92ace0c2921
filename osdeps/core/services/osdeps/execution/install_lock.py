"""
L4 Execution — Cross-process install lock.

Advisory ``flock`` on a well-known file. Every osdeps process on the
machine that installs through a locking manager takes the same lock,
so at most one of them runs a package manager at any time.
"""

from __future__ import annotations

import fcntl
import logging
import os
import time
from collections.abc import Callable
from typing import IO

from osdeps.core.services.osdeps.data.constants import (
    LOCK_PATH,
    LOCK_PATH_ENV,
    LOCK_RETRY_SECONDS,
)

logger = logging.getLogger(__name__)


def default_lock_path() -> str:
    return os.environ.get(LOCK_PATH_ENV) or LOCK_PATH


class InstallLock:
    """Scoped exclusive lock, polled until free.

    Usage::

        with InstallLock():
            run_the_install()

    The lock is released when the block exits, however it exits.
    There is no overall timeout: we wait as long as the holder works.
    """

    def __init__(
        self,
        path: str | None = None,
        retry_interval: float = LOCK_RETRY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.path = path or default_lock_path()
        self.retry_interval = retry_interval
        self._sleep = sleep
        self._handle: IO[str] | None = None

    @property
    def held(self) -> bool:
        return self._handle is not None

    def acquire(self) -> None:
        handle = open(self.path, "w")
        try:
            while not self._try_lock(handle):
                logger.warning(
                    "  waiting for other osdeps instances to finish their "
                    "osdeps installation"
                )
                self._sleep(self.retry_interval)
        except BaseException:
            handle.close()
            raise
        self._handle = handle
        logger.debug("Acquired install lock %s", self.path)

    def release(self) -> None:
        if self._handle is None:
            return
        try:
            fcntl.flock(self._handle, fcntl.LOCK_UN)
        finally:
            self._handle.close()
            self._handle = None
        logger.debug("Released install lock %s", self.path)

    @staticmethod
    def _try_lock(handle: IO[str]) -> bool:
        try:
            fcntl.flock(handle, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            return False
        return True

    def __enter__(self) -> InstallLock:
        self.acquire()
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"<InstallLock path={self.path!r} held={self.held}>"
