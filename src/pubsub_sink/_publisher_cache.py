# Copyright 2025 Confluent Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import atexit
import logging
from threading import Lock

logger = logging.getLogger(__name__)


class PublisherCache(object):
    """
    Thread-safe registry of publishers shared by every writer of a process.

    Entries are created lazily, at most once per destination, and are kept
    until the process exits. Lookups of an existing entry take no lock; only
    the creation path is serialised, per destination.
    """

    def __init__(self):
        self._lock = Lock()
        self._publishers = {}
        self._creation_locks = {}

    def get_or_create(self, destination, factory):
        """
        Get the publisher registered for ``destination``, creating it with
        ``factory`` on first use.

        When several threads ask for the same missing destination at once,
        exactly one of them calls ``factory`` and all of them receive its
        result. If ``factory`` raises, the exception propagates and nothing is
        registered, so a later call tries again.

        Args:
            destination (hashable): Destination identity, e.g. a topic path.

            factory (callable): Zero-argument callable building the publisher.

        Returns:
            object: The shared publisher for ``destination``.
        """
        publisher = self._publishers.get(destination)
        if publisher is not None:
            return publisher

        with self._lock:
            creation_lock = self._creation_locks.setdefault(destination, Lock())

        with creation_lock:
            publisher = self._publishers.get(destination)
            if publisher is None:
                logger.debug(f"Creating shared publisher for {destination}")
                publisher = factory()
                self._publishers[destination] = publisher
                # Later lookups take the lock-free path
                with self._lock:
                    self._creation_locks.pop(destination, None)
            return publisher

    def __contains__(self, destination):
        return destination in self._publishers

    def __len__(self):
        return len(self._publishers)

    def close(self):
        """
        Close every registered publisher. Meant to run once, at process exit.
        """
        with self._lock:
            publishers = list(self._publishers.values())
            self._publishers.clear()
            self._creation_locks.clear()
        for publisher in publishers:
            try:
                publisher.close()
            except Exception:
                logger.warning("Error closing shared publisher", exc_info=True)


_default_cache = PublisherCache()
atexit.register(_default_cache.close)


def get_or_create(destination, factory):
    """Look up ``destination`` in the process-wide :py:class:`PublisherCache`"""
    return _default_cache.get_or_create(destination, factory)
