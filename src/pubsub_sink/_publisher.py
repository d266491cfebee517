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

import grpc
from google.api_core.client_options import ClientOptions
from google.pubsub_v1 import PublisherClient
from google.pubsub_v1.services.publisher.transports import PublisherGrpcTransport

from .emulator import get_emulator_endpoint

logger = logging.getLogger(__name__)


def create_publisher_client(endpoint=None, credentials=None):
    """Create a Pub/Sub publisher client

    The client talks to the emulator when one is configured (see
    :py:func:`pubsub_sink.emulator.get_emulator_endpoint`), otherwise to
    ``endpoint`` or the default production endpoint.

    Args:
        endpoint: Optional endpoint override
        credentials: Optional google.auth credentials, ignored for the emulator

    Returns:
        PublisherClient: Generated Pub/Sub publisher client
    """
    emulator_endpoint = get_emulator_endpoint(endpoint)
    if emulator_endpoint is not None:
        logger.info(f"Connecting publisher to Pub/Sub emulator at {emulator_endpoint}")
        channel = grpc.insecure_channel(emulator_endpoint)
        return PublisherClient(transport=PublisherGrpcTransport(channel=channel))

    client_options = ClientOptions(api_endpoint=endpoint) if endpoint else None
    return PublisherClient(credentials=credentials, client_options=client_options)


class PublisherHandle:
    """Publishes batches to one destination topic over one client

    This class is responsible for:
    - Owning a single publisher client (one network connection)
    - Running the blocking publish RPC on its own thread pool so callers never block
    - Tracking the number of requests that are still in flight

    Retries and timeouts are left to the client's default policy.
    """

    def __init__(self, client, topic, executor=None, max_workers=1):
        """Initialize the publisher handle

        Args:
            client: PublisherClient instance bound to the destination
            topic: Destination topic path (``projects/<p>/topics/<t>``)
            executor: Optional executor to run publish calls on
            max_workers: Worker count when the handle creates its own executor
        """
        self._client = client
        self._topic = topic
        self._owns_executor = executor is None
        if executor is not None:
            self._executor = executor
        else:
            self._executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix='pubsub-publisher')
        self._lock = Lock()
        self._pending = set()
        self._closed = False

    @property
    def topic(self):
        return self._topic

    @property
    def in_flight(self):
        """Number of publish requests issued but not yet completed"""
        with self._lock:
            return len(self._pending)

    def publish(self, batch):
        """Publish a batch asynchronously

        Args:
            batch: PublishBatch to send

        Returns:
            concurrent.futures.Future: Resolves to the PublishResponse, or
            carries the transport exception on failure

        Raises:
            RuntimeError: If the handle has been closed
        """
        with self._lock:
            if self._closed:
                raise RuntimeError(f"Publisher for {self._topic} is closed")
            future = self._executor.submit(self._publish_blocking, batch)
            self._pending.add(future)

        future.add_done_callback(self._request_done)
        return future

    def close(self):
        """Wait for in-flight requests, then release the client"""
        with self._lock:
            if self._closed:
                return
            self._closed = True

        if self._owns_executor:
            self._executor.shutdown(wait=True)
        else:
            with self._lock:
                pending = list(self._pending)
            concurrent.futures.wait(pending)
        self._client.transport.close()

    def _publish_blocking(self, batch):
        logger.debug(f"Publishing {batch.size} messages to {self._topic}")
        return self._client.publish(topic=self._topic, messages=batch.to_pubsub_messages())

    def _request_done(self, future):
        with self._lock:
            self._pending.discard(future)
