#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
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
#

import logging

from . import _publisher_cache
from ._publisher_pool import PublisherPool
from .batching_dispatcher import BatchingDispatcher
from .config import SinkConfig
from .record import RecordConverter

logger = logging.getLogger(__name__)


class PubSubSinkTask(object):
    """
    A sink task writing records read from partitioned source topics to one
    Google Cloud Pub/Sub topic.

    The host framework drives the task through its lifecycle:
    :py:func:`start` once, :py:func:`put` for every delivered group of
    records, :py:func:`flush` at every commit boundary and :py:func:`stop`
    once at the end. ``put`` and ``flush`` are never called concurrently on
    one task.

    Records are published asynchronously. :py:func:`flush` only returns once
    every record passed to ``put`` before it has been acknowledged by
    Pub/Sub, so source offsets may be committed when it returns.

    Args:
        pool_factory (callable, optional): Callable(SinkConfig) ->
            PublisherPool used instead of connecting to Pub/Sub, for example
            in tests.

    """
    def __init__(self, pool_factory=None):
        self._pool_factory = pool_factory if pool_factory is not None else self._create_pool
        self._config = None
        self._pool = None
        self._owns_pool = False
        self._converter = None
        self._dispatcher = None

    def version(self):
        from . import __version__
        return __version__

    @property
    def config(self):
        return self._config

    @property
    def dispatcher(self):
        return self._dispatcher

    def start(self, props):
        """
        Configure the task and open its publishers.

        Args:
            props (dict): Sink configuration, see :py:class:`SinkConfig`.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        config = props if isinstance(props, SinkConfig) else SinkConfig.from_dict(props)
        logger.info(f"Start sink task for topic {config.topic_path} min batch size = {config.min_batch_size}")

        if config.publisher_shared:
            self._pool = _publisher_cache.get_or_create(config.topic_path, lambda: self._pool_factory(config))
            self._owns_pool = False
        else:
            self._pool = self._pool_factory(config)
            self._owns_pool = True

        self._config = config
        self._converter = RecordConverter(config.value_serializer)
        self._dispatcher = BatchingDispatcher(
            self._pool,
            config.topic_path,
            min_batch_size=config.min_batch_size,
            max_request_bytes=config.max_request_bytes,
            max_messages_per_request=config.max_messages_per_request)

    def put(self, records):
        """
        Buffer records, publishing partitions that reach a threshold.

        Records are processed in order. A malformed record aborts the call;
        records before it stay buffered.

        Args:
            records (iterable(SinkRecord)): Records delivered by the host.

        Raises:
            RecordValidationError: If a record can not be converted.

            PublishError: If an earlier publish request failed.
        """
        records = list(records)
        logger.debug(f"Received {len(records)} records to send to Pub/Sub")
        for record in records:
            message = self._converter.convert(record)
            self._dispatcher.submit(record.topic, record.partition, message)

    def flush(self, offsets=None):
        """
        Publish every buffered record and wait until Pub/Sub acknowledged
        them all.

        Args:
            offsets (dict, optional): Offsets the host is about to commit.
                Only used for logging.

        Raises:
            PublishError: If any publish request failed.
        """
        if offsets:
            logger.debug(f"Flushing before committing offsets {offsets}")
        self._dispatcher.drain()

    def stop(self):
        """
        Release the task's publishers.

        A shared pool stays open for the other tasks of the process.
        """
        if self._pool is not None and self._owns_pool:
            self._pool.close()
        self._pool = None
        logger.info("Stopped sink task")

    @staticmethod
    def _create_pool(config):
        return PublisherPool.create(config.topic_path, config.publisher_pool_size,
                                    endpoint=config.endpoint, credentials=config.credentials)
