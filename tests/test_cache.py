# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""Tests for the color conversion cache and batch conversion."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from seedtone.errors import InvalidColorError
from seedtone.runtime.cache import (
    ColorCache,
    ReadWriteLock,
    batch_convert,
    convert_palette,
)
from seedtone.schema import Color


class TestColorCache:

    def test_parse_caches(self):
        cache = ColorCache()
        c = cache.parse("#6750A4")
        assert c == Color.from_hex("#6750A4")
        assert "#6750A4" in cache
        assert len(cache) == 1
        assert cache.parse("#6750A4") is c

    def test_get_missing(self):
        assert ColorCache().get("#000000") is None

    def test_invalid_not_cached(self):
        cache = ColorCache()
        with pytest.raises(InvalidColorError):
            cache.parse("#nope")
        assert len(cache) == 0

    def test_clear(self):
        cache = ColorCache()
        cache.parse("#FFFFFF")
        cache.clear()
        assert len(cache) == 0
        assert "#FFFFFF" not in cache

    def test_max_size_evicts_oldest(self):
        cache = ColorCache(max_size=2)
        for h in ("#000001", "#000002", "#000003"):
            cache.parse(h)
        assert len(cache) == 2
        assert "#000001" not in cache
        assert "#000003" in cache

    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            ColorCache(max_size=0)

    def test_concurrent_parse_single_entry(self):
        cache = ColorCache()
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(cache.parse, ["#123456"] * 64))
        assert len(cache) == 1
        assert all(r is results[0] for r in results)


class TestBatchConvert:

    def test_order_preserved(self):
        hexes = [f"#{i:02X}{255 - i:02X}80" for i in range(40)]
        colors = batch_convert(hexes, ColorCache(), max_workers=4)
        assert [c.hex for c in colors] == hexes

    def test_empty(self):
        assert batch_convert([], ColorCache()) == []

    def test_duplicates_share_entry(self):
        cache = ColorCache()
        colors = batch_convert(["#FF0000", "#FF0000", "#00FF00"], cache)
        assert colors[0] == colors[1]
        assert len(cache) == 2

    def test_first_error_in_input_order(self):
        with pytest.raises(InvalidColorError, match="zzzzzz"):
            batch_convert(["#FF0000", "#zzzzzz", "#12"], ColorCache())

    def test_valid_entries_finish_before_error(self):
        cache = ColorCache()
        with pytest.raises(InvalidColorError):
            batch_convert(["bad", "#FF0000", "#00FF00"], cache, max_workers=2)
        assert "#FF0000" in cache
        assert "#00FF00" in cache

    def test_invalid_workers(self):
        with pytest.raises(ValueError):
            batch_convert(["#FF0000"], ColorCache(), max_workers=0)


class TestConvertPalette:

    def test_converts_mapping(self):
        result = convert_palette({"bg": "#101010", "fg": "#F0F0F0"}, ColorCache())
        assert result == {"bg": Color(16, 16, 16), "fg": Color(240, 240, 240)}

    def test_invalid_entries_skipped(self):
        result = convert_palette({"bg": "#101010", "oops": "#1234", "fg": "F0F0F0"}, ColorCache())
        assert list(result) == ["bg", "fg"]

    def test_uses_cache(self):
        cache = ColorCache()
        cached = cache.parse("#101010")
        assert convert_palette({"bg": "#101010"}, cache)["bg"] is cached


class TestReadWriteLock:

    def test_readers_share(self):
        lock = ReadWriteLock()
        entered = threading.Event()

        def reader():
            with lock.read():
                entered.set()

        with lock.read():
            t = threading.Thread(target=reader)
            t.start()
            assert entered.wait(timeout=2.0)
        t.join()

    def test_writer_waits_for_reader(self):
        lock = ReadWriteLock()
        written = threading.Event()

        def writer():
            with lock.write():
                written.set()

        with lock.read():
            t = threading.Thread(target=writer)
            t.start()
            assert not written.wait(timeout=0.1)
        assert written.wait(timeout=2.0)
        t.join()
