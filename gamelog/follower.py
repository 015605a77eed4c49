"""Follow a growing log file — keeps the read cursor and drives the readers.

The readers themselves are stateless; this is the caller side that remembers
how many lines have been consumed, notices truncation, and tracks the player.
Polls are triggered by watchdog file events plus a fallback timer.
"""

import os
import logging
import threading
import time
from typing import Callable

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from gamelog.models import LogUpdate
from gamelog.reader import LogReadError, extract_player_name_from_lines, read_log_update

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.25


class LogFollower:
    def __init__(
        self,
        path: str,
        on_update: Callable[[LogUpdate], None] | None = None,
        on_player_change: Callable[[str], None] | None = None,
        extract_patterns: bool = True,
    ):
        self._path = path
        self._on_update = on_update
        self._on_player_change = on_player_change
        self._extract_patterns = extract_patterns
        self._lock = threading.Lock()
        self._started = False
        self.line_count = 0
        self.player_name: str | None = None

    @property
    def path(self) -> str:
        return self._path

    def poll(self) -> LogUpdate | None:
        """Read anything new. Returns None if the file could not be read.

        Callbacks run after the lock is released, so they may poll again.
        """
        with self._lock:
            try:
                update = self._read()
            except LogReadError as e:
                logger.warning("Skipping poll of %s: %s", self._path, e)
                return None

            self.line_count = update.line_count
            new_player = self._set_player(update.player_name)
            has_news = bool(update.new_lines or update.patterns)

        if new_player and self._on_player_change:
            self._on_player_change(new_player)
        if has_news:
            logger.debug("Poll of %s: %d new lines, %d patterns",
                         self._path, len(update.new_lines), len(update.patterns))
            if self._on_update:
                self._on_update(update)
        return update

    def _read(self) -> LogUpdate:
        if not self._started:
            update = read_log_update(self._path, 0, True, self._extract_patterns)
            self._started = True
            return update

        update = read_log_update(self._path, self.line_count, False, self._extract_patterns)

        if update.line_count < self.line_count:
            logger.info("File truncation detected (%d -> %d lines), re-reading from start",
                        self.line_count, update.line_count)
            return read_log_update(self._path, 0, True, self._extract_patterns)

        update.player_name = extract_player_name_from_lines(update.new_lines)
        return update

    def _set_player(self, name: str | None) -> str | None:
        """Record ``name``; returns it only when it differs from the current one."""
        if name is None or name == self.player_name:
            return None
        logger.info("Player changed: %s -> %s", self.player_name, name)
        self.player_name = name
        return name


class LogFileEventHandler(FileSystemEventHandler):
    """Watchdog handler that polls the follower when its file changes."""

    def __init__(self, follower: LogFollower):
        super().__init__()
        self._follower = follower
        self._target = os.path.abspath(follower.path)
        self._last_poll = 0.0

    def on_created(self, event):
        if not event.is_directory and os.path.abspath(event.src_path) == self._target:
            logger.info("Followed file created: %s", self._target)
            self._handle()

    def on_modified(self, event):
        if not event.is_directory and os.path.abspath(event.src_path) == self._target:
            self._handle()

    def _handle(self):
        now = time.time()
        if now - self._last_poll < DEBOUNCE_SECONDS:
            return
        self._last_poll = now
        self._follower.poll()


def follow(follower: LogFollower, poll_interval: float = 1.0,
           stop_event: threading.Event | None = None) -> None:
    """Poll on file events and every ``poll_interval`` seconds until stopped."""
    stop_event = stop_event or threading.Event()
    watch_dir = os.path.dirname(os.path.abspath(follower.path))

    follower.poll()

    observer = Observer()
    try:
        observer.schedule(LogFileEventHandler(follower), watch_dir, recursive=False)
        observer.start()
    except OSError as e:
        logger.warning("Cannot watch %s (%s), falling back to polling only", watch_dir, e)
        observer = None
    logger.info("Following %s (fallback poll every %.1fs)", follower.path, poll_interval)

    try:
        while not stop_event.wait(poll_interval):
            follower.poll()
    finally:
        if observer is not None:
            observer.stop()
            observer.join(timeout=5)
        logger.info("Stopped following %s", follower.path)
