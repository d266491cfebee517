#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Unit tests for the PublisherCache class (_publisher_cache.py)
"""

import threading
import time

import pytest

from pubsub_sink import PublisherCache
from pubsub_sink import _publisher_cache


class CountingFactory(object):
    def __init__(self, publisher_factory, delay=0.0):
        self._publisher_factory = publisher_factory
        self._delay = delay
        self._lock = threading.Lock()
        self.calls = 0

    def __call__(self):
        with self._lock:
            self.calls += 1
        time.sleep(self._delay)
        return self._publisher_factory()


class TestPublisherCache:

    def test_creates_once_and_reuses(self, publisher_factory):
        cache = PublisherCache()
        factory = CountingFactory(publisher_factory)

        first = cache.get_or_create('projects/p/topics/t', factory)
        second = cache.get_or_create('projects/p/topics/t', factory)

        assert first is second
        assert factory.calls == 1
        assert 'projects/p/topics/t' in cache
        assert len(cache) == 1

    def test_distinct_destinations_get_distinct_publishers(self, publisher_factory):
        cache = PublisherCache()

        a = cache.get_or_create('projects/p/topics/a', publisher_factory)
        b = cache.get_or_create('projects/p/topics/b', publisher_factory)

        assert a is not b
        assert len(cache) == 2

    def test_concurrent_first_use_calls_factory_once(self, publisher_factory):
        cache = PublisherCache()
        factory = CountingFactory(publisher_factory, delay=0.05)
        callers = 16
        barrier = threading.Barrier(callers)
        results = [None] * callers

        def worker(i):
            barrier.wait()
            results[i] = cache.get_or_create('projects/p/topics/t', factory)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(callers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert factory.calls == 1
        assert all(r is results[0] for r in results)
        assert results[0] is not None

    def test_factory_failure_leaves_key_unpopulated(self, publisher_factory):
        cache = PublisherCache()

        def broken():
            raise OSError('could not connect')

        with pytest.raises(OSError, match='could not connect'):
            cache.get_or_create('projects/p/topics/t', broken)
        assert 'projects/p/topics/t' not in cache

        publisher = cache.get_or_create('projects/p/topics/t', publisher_factory)
        assert cache.get_or_create('projects/p/topics/t', broken) is publisher

    def test_creation_lock_released_once_populated(self, publisher_factory):
        cache = PublisherCache()

        def broken():
            raise OSError('could not connect')

        with pytest.raises(OSError):
            cache.get_or_create('projects/p/topics/t', broken)
        cache.get_or_create('projects/p/topics/t', publisher_factory)
        cache.get_or_create('projects/p/topics/u', publisher_factory)

        assert cache._creation_locks == {}

    def test_close_closes_every_publisher(self, publisher_factory):
        cache = PublisherCache()
        a = cache.get_or_create('projects/p/topics/a', publisher_factory)
        b = cache.get_or_create('projects/p/topics/b', publisher_factory)

        cache.close()

        assert a.closed and b.closed
        assert len(cache) == 0

    def test_module_level_cache(self, publisher_factory):
        destination = 'projects/p/topics/module-level-{}'.format(id(self))

        first = _publisher_cache.get_or_create(destination, publisher_factory)
        second = _publisher_cache.get_or_create(destination, publisher_factory)

        assert first is second
