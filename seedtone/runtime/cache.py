# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Hex → Color conversion cache and parallel batch conversion.

The cache is an explicit object handed to whoever needs it; there is no
module-level instance. Reads take a shared lock, inserts an exclusive one.
Cached Colors are immutable, so a value handed out by ``get`` never
changes underneath the caller.

Known limitation: ``clear()`` is a coarse reset. A batch running
concurrently with it may re-insert entries right after the clear.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping, Optional

from seedtone.errors import InvalidColorError
from seedtone.schema import Color

logger = logging.getLogger(__name__)


DEFAULT_MAX_WORKERS = 8


class ReadWriteLock:
    """
    Many readers or one writer.

    Writers wait for active readers to drain; new readers wait while a
    writer holds the lock. Not reentrant.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers > 0:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ColorCache:
    """
    Thread-safe mapping of hex text → parsed Color.

    Args:
        max_size: Entry limit. When full, the oldest entry is evicted
            before inserting. None (default) means unbounded.
    """

    def __init__(self, max_size: Optional[int] = None) -> None:
        if max_size is not None and max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._entries: dict[str, Color] = {}
        self._lock = ReadWriteLock()

    def get(self, hex_color: str) -> Optional[Color]:
        """Cached Color for ``hex_color``, or None."""
        with self._lock.read():
            return self._entries.get(hex_color)

    def parse(self, hex_color: str) -> Color:
        """
        Parse ``hex_color``, reusing a cached result when present.

        Failed parses are not cached.

        Raises:
            InvalidColorError: If the text is not a 6-digit hex color
        """
        cached = self.get(hex_color)
        if cached is not None:
            return cached

        color = Color.from_hex(hex_color)
        with self._lock.write():
            # Another thread may have inserted it meanwhile; keep the first
            existing = self._entries.get(hex_color)
            if existing is not None:
                return existing
            if self.max_size is not None and len(self._entries) >= self.max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
            self._entries[hex_color] = color
        return color

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock.write():
            self._entries = {}

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def __contains__(self, hex_color: object) -> bool:
        with self._lock.read():
            return hex_color in self._entries


def _submit_all(
    cache: ColorCache,
    hex_colors: list[str],
    max_workers: int,
) -> list[Future]:
    if max_workers <= 0:
        raise ValueError(f"max_workers must be positive, got {max_workers}")
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(cache.parse, h) for h in hex_colors]
    # Leaving the with-block waits for every conversion
    return futures


def batch_convert(
    hex_colors: Iterable[str],
    cache: ColorCache,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[Color]:
    """
    Parse many hex colors concurrently through ``cache``.

    At most ``max_workers`` conversions run at once. Every conversion runs
    to completion before results are returned or an error is raised.

    Returns:
        Colors in input order

    Raises:
        InvalidColorError: The first failure in input order
    """
    hex_colors = list(hex_colors)
    if not hex_colors:
        return []

    futures = _submit_all(cache, hex_colors, max_workers)

    errors = [f.exception() for f in futures]
    for error in errors:
        if error is not None:
            raise error

    logger.debug("Converted %d colors (%d cached)", len(hex_colors), len(cache))
    return [f.result() for f in futures]


def convert_palette(
    palette: Mapping[str, str],
    cache: ColorCache,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> dict[str, Color]:
    """
    Parse a name → hex mapping concurrently through ``cache``.

    Entries whose hex text does not parse are left out of the result
    rather than failing the whole palette.

    Returns:
        name → Color for every valid entry, in input order
    """
    names = list(palette)
    if not names:
        return {}

    futures = _submit_all(cache, [palette[n] for n in names], max_workers)

    result: dict[str, Color] = {}
    for name, future in zip(names, futures):
        error = future.exception()
        if error is None:
            result[name] = future.result()
        elif isinstance(error, InvalidColorError):
            logger.debug("Skipping %s: %s", name, error)
        else:
            raise error
    return result
