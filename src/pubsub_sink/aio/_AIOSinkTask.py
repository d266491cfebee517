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

import asyncio
import concurrent.futures
import logging

import pubsub_sink.aio._common as _common
from pubsub_sink.sink_task import PubSubSinkTask

logger = logging.getLogger(__name__)


class AIOSinkTask:

    # ========================================================================
    # INITIALIZATION AND LIFECYCLE MANAGEMENT
    # ========================================================================

    def __init__(self, props, max_workers=1, executor=None, pool_factory=None):
        if executor is not None:
            self.executor = executor
            self._owns_executor = False
        else:
            self.executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=max_workers)
            self._owns_executor = True

        self._task = PubSubSinkTask(pool_factory=pool_factory)
        self._task.start(props)

        # put() and flush() must not overlap: the dispatcher is single-writer.
        # Created on first use, inside the loop that runs the task.
        self._lock = None
        self._is_closed = False

    async def close(self):
        """Flush remaining records and release publishers and the thread pool

        The shutdown sequence is:

        1. **Flush**: Publishes every buffered record and waits for Pub/Sub
        2. **Stop**: Closes the publishers owned by the task
        3. **Shutdown ThreadPool**: Waits for the executor's workers, off the event loop

        Steps 2 and 3 run even if the flush fails; the flush error is then
        raised. Calling close() again is a no-op.

        Raises:
            PublishError: If a publish request failed
        """
        if self._is_closed:
            return
        self._is_closed = True
        logger.debug("Closing sink task")

        try:
            await self.flush()
        finally:
            await self._call(self._task.stop)
            if self._owns_executor:
                await asyncio.get_running_loop().run_in_executor(
                    None, self.executor.shutdown, True
                )

    # ========================================================================
    # CORE SINK OPERATIONS - Main public API
    # ========================================================================

    async def put(self, records):
        """Buffer records; partitions reaching a threshold are published in the background

        Args:
            records: Iterable of SinkRecord
        """
        async with self._get_lock():
            self._task.put(records)

    async def flush(self, offsets=None):
        """Publish every buffered record and wait until all are acknowledged

        The blocking drain runs on the thread pool so the event loop keeps
        running while requests complete.

        Args:
            offsets: Optional offsets about to be committed, for logging
        """
        async with self._get_lock():
            await self._call(self._task.flush, offsets)

    # ========================================================================
    # UTILITY METHODS - Helper functions and internal utilities
    # ========================================================================

    def _get_lock(self):
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def _call(self, blocking_task, *args, **kwargs):
        """Helper method for blocking operations that need ThreadPool execution"""
        return await _common.async_call(self.executor, blocking_task, *args, **kwargs)
