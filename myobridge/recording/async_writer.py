# myobridge/recording/async_writer.py
from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from queue import Empty, Queue
from typing import Callable, List, Optional

BatchWriter = Callable[[Path, List[str]], None]


def append_lines(path: Path, batch: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        for line in batch:
            f.write(line + "\n")


class AsyncWriter:
    """
    Background, batched line writer.

    Producers call write() from any thread; a daemon thread drains the queue
    and hands batches to write_func every flush_interval seconds.
    """

    def __init__(
        self,
        path: Path,
        write_func: BatchWriter = append_lines,
        flush_interval: float = 0.5,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self.path = Path(path)
        self._write_func = write_func
        self._flush_interval = float(flush_interval)
        self._log = logger or logging.getLogger(__name__)

        self._queue: "Queue[str]" = Queue()
        self._stop_event = threading.Event()

        self._thread = threading.Thread(target=self._worker, name="AsyncWriter", daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._stop_event.is_set()

    def write(self, line: str) -> None:
        """Queue a line (dropped after close())."""
        if self._stop_event.is_set():
            return
        self._queue.put(line)

    def close(self) -> None:
        """Flush what is queued and join the worker."""
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        self._thread.join()

    def _worker(self) -> None:
        batch: List[str] = []
        last_flush = time.monotonic()

        while not self._stop_event.is_set() or not self._queue.empty():
            try:
                batch.append(self._queue.get(timeout=0.1))
            except Empty:
                pass

            now = time.monotonic()
            if batch and (self._stop_event.is_set() or now - last_flush >= self._flush_interval):
                self._flush(batch)
                batch = []
                last_flush = now

        if batch:
            self._flush(batch)

    def _flush(self, batch: List[str]) -> None:
        # a failed batch is dropped; the worker keeps running
        try:
            self._write_func(self.path, batch)
        except Exception:
            self._log.exception("ASYNC_WRITER_FLUSH_FAILED path=%s batch_len=%d", self.path, len(batch))
