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

import concurrent.futures
import logging
from threading import Lock

from ._message_batch import PartitionKey, SinkMessage, create_publish_batch
from ._partition_buffer import PartitionBuffer
from .error import PublishError, RecordValidationError

logger = logging.getLogger(__name__)


class BatchingDispatcher:
    """Batches messages per source partition and dispatches them to Pub/Sub

    This class is responsible for:
    - Keeping one PartitionBuffer per (topic, partition)
    - Publishing a partition before it would exceed the request byte ceiling
    - Publishing a partition as soon as it reaches the minimum batch size
    - Splitting a partition into requests of at most max_messages_per_request
    - Tracking in-flight requests so drain() can act as a checkpoint barrier
    - Recording the first publish failure and failing fast afterwards

    ``submit`` and ``drain`` must be called from one thread at a time.
    Publish completions arrive on transport threads and only touch the
    in-flight set and the failure slot, both guarded by a lock.

    Requests cut from one partition are issued in arrival order but may be
    in flight at the same time, on different publishers. Message order is
    guaranteed within a request.
    """

    def __init__(self, publisher_pool, topic, min_batch_size, max_request_bytes, max_messages_per_request):
        """Initialize the dispatcher

        Args:
            publisher_pool: PublisherPool the requests are dispatched on
            topic: Destination topic path
            min_batch_size: Message count at which a partition is published
            max_request_bytes: Byte ceiling of one request
            max_messages_per_request: Message ceiling of one request
        """
        self._publisher_pool = publisher_pool
        self._topic = topic
        self._min_batch_size = min_batch_size
        self._max_request_bytes = max_request_bytes
        self._max_messages_per_request = max_messages_per_request

        self._buffers = {}
        self._lock = Lock()
        self._in_flight = {}
        self._failure = None

    @property
    def topic(self):
        return self._topic

    def get_pending_count(self):
        """Get the number of buffered messages across all partitions"""
        return sum(len(buffer) for buffer in self._buffers.values())

    def get_in_flight_count(self):
        """Get the number of requests issued by this dispatcher and not yet completed"""
        with self._lock:
            return len(self._in_flight)

    def get_buffer(self, topic, partition):
        """Get the buffer of a partition, or None if none was created since the last drain"""
        return self._buffers.get(PartitionKey(topic, partition))

    def submit(self, topic, partition, message):
        """Buffer a message and publish its partition when a threshold is reached

        Never blocks on network I/O.

        Args:
            topic: Source topic of the message
            partition: Source partition of the message
            message: SinkMessage to publish

        Raises:
            RecordValidationError: If the input is malformed; no buffer is modified
            PublishError: If an earlier publish request failed
        """
        self.raise_for_failure()
        self._validate(topic, partition, message)

        key = PartitionKey(topic, partition)
        buffer = self._buffers.get(key)
        if buffer is None:
            buffer = PartitionBuffer()
            self._buffers[key] = buffer

        if buffer.would_overflow(message, self._max_request_bytes):
            self._flush_partition(key, buffer.take())

        buffer.append(message)

        if len(buffer) >= self._min_batch_size:
            self._flush_partition(key, buffer.take())

    def drain(self):
        """Publish every buffered message and wait for all in-flight requests

        Every non-empty partition is published once, regardless of the
        thresholds, then the method blocks until every request issued by this
        dispatcher has completed. A checkpoint may be committed once drain()
        returns.

        Raises:
            PublishError: If any publish request failed
        """
        self.raise_for_failure()

        partitions = 0
        for key, buffer in self._buffers.items():
            if not buffer.is_empty():
                self._flush_partition(key, buffer.take())
                partitions += 1
        self._buffers.clear()

        with self._lock:
            in_flight = list(self._in_flight.items())

        if partitions or in_flight:
            logger.info(f"Drained {partitions} partitions, waiting for {len(in_flight)} publish requests")
        concurrent.futures.wait([future for future, _ in in_flight])

        # Waiters wake before done callbacks run
        for future, _ in in_flight:
            self._complete(future)

        self.raise_for_failure()

    def raise_for_failure(self):
        """Raise the first recorded publish failure, if any

        Raises:
            PublishError: The first publish failure seen by this dispatcher
        """
        with self._lock:
            failure = self._failure
        if failure is not None:
            raise failure

    def _validate(self, topic, partition, message):
        if not isinstance(topic, str) or not topic:
            raise RecordValidationError(f"Unexpected topic {topic!r}", record=message)
        if isinstance(partition, bool) or not isinstance(partition, int):
            raise RecordValidationError(f"Unexpected partition {partition!r}", record=message)
        if not isinstance(message, SinkMessage) or not isinstance(message.data, bytes):
            raise RecordValidationError(f"Unexpected message of type {type(message).__name__}", record=message)
        if message.size > self._max_request_bytes:
            raise RecordValidationError(
                f"Message of {message.size} bytes exceeds the request limit of {self._max_request_bytes} bytes",
                record=message)

    def _flush_partition(self, key, messages):
        """Publish the messages of one partition in chunks, in arrival order

        Byte size is already bounded by the admission policy, so chunks are
        cut by message count only.

        Args:
            key: PartitionKey the messages were buffered under
            messages: Messages in arrival order
        """
        for sequence, start in enumerate(range(0, len(messages), self._max_messages_per_request)):
            batch = create_publish_batch(
                topic=self._topic,
                partition_key=key,
                messages=messages[start:start + self._max_messages_per_request],
                sequence=sequence,
            )
            logger.debug(f"Dispatching {batch.info}")
            self._dispatch(batch)

    def _dispatch(self, batch):
        try:
            future = self._publisher_pool.dispatch(batch)
        except Exception as e:
            logger.error(f"Failed to dispatch {batch.info}", exc_info=True)
            error = PublishError(self._topic, batch.partition_key, batch.info, e)
            self._record_failure(error)
            raise error from e

        with self._lock:
            self._in_flight[future] = batch
        future.add_done_callback(self._complete)

    def _complete(self, future):
        """Account for a finished request

        Runs as the done callback on the transport thread and from drain();
        whichever removes the future from the in-flight map reports it.
        """
        with self._lock:
            batch = self._in_flight.pop(future, None)
        if batch is None:
            return

        if future.cancelled():
            exception = concurrent.futures.CancelledError()
        else:
            exception = future.exception()
        if exception is None:
            return

        logger.error(f"Failed to publish {batch.info} to {self._topic}: {exception!r}")
        self._record_failure(PublishError(self._topic, batch.partition_key, batch.info, exception))

    def _record_failure(self, error):
        with self._lock:
            if self._failure is None:
                self._failure = error
