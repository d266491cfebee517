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

import logging
from threading import Lock

from ._publisher import PublisherHandle, create_publisher_client

logger = logging.getLogger(__name__)


class PublisherPool:
    """Fixed set of publisher handles used in round-robin order

    Consecutive dispatches go to handles 0, 1, ..., N-1, 0, 1, ... so that
    concurrent requests spread over independent connections. The selection
    counter is guarded by a lock, which makes a pool safe to share between
    dispatchers running on different threads.
    """

    def __init__(self, handles):
        """Initialize the pool

        Args:
            handles: Non-empty sequence of PublisherHandle-like objects
        """
        handles = tuple(handles)
        if not handles:
            raise ValueError("PublisherPool requires at least one handle")
        self._handles = handles
        self._lock = Lock()
        self._counter = 0

    @classmethod
    def create(cls, topic, size, endpoint=None, credentials=None):
        """Build a pool of ``size`` handles, each with its own client

        Args:
            topic: Destination topic path
            size: Number of handles
            endpoint: Optional endpoint override
            credentials: Optional google.auth credentials

        Returns:
            PublisherPool: The new pool
        """
        logger.info(f"Creating {size} publishers for {topic}")
        handles = [PublisherHandle(create_publisher_client(endpoint, credentials), topic)
                   for _ in range(size)]
        return cls(handles)

    @property
    def size(self):
        return len(self._handles)

    @property
    def in_flight(self):
        """Total number of in-flight requests across all handles"""
        return sum(handle.in_flight for handle in self._handles)

    def dispatch(self, batch):
        """Send a batch on the next handle in round-robin order

        Returns immediately; the request runs in the background.

        Args:
            batch: PublishBatch to send

        Returns:
            concurrent.futures.Future: Completion of the publish request
        """
        with self._lock:
            handle = self._handles[self._counter]
            self._counter = (self._counter + 1) % len(self._handles)
        return handle.publish(batch)

    def close(self):
        """Close every handle, waiting for their in-flight requests"""
        for handle in self._handles:
            handle.close()
