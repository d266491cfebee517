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

from ._message_batch import PartitionKey, PublishBatch, SinkMessage
from ._partition_buffer import PartitionBuffer
from ._publisher import PublisherHandle, create_publisher_client
from ._publisher_cache import PublisherCache
from ._publisher_pool import PublisherPool
from .batching_dispatcher import BatchingDispatcher
from .config import SinkConfig
from .error import (ConfigurationError, PublishError, PubSubSinkError,
                    RecordValidationError, SerializationError,
                    ValueSerializationError)
from .record import RecordConverter, SinkRecord
from .sink_task import PubSubSinkTask

__all__ = [
    "aio",
    "BatchingDispatcher",
    "ConfigurationError",
    "create_publisher_client",
    "emulator",
    "PartitionBuffer",
    "PartitionKey",
    "PublishBatch",
    "PublishError",
    "PublisherCache",
    "PublisherHandle",
    "PublisherPool",
    "PubSubSinkError",
    "PubSubSinkTask",
    "RecordConverter",
    "RecordValidationError",
    "SerializationError",
    "SinkConfig",
    "SinkMessage",
    "SinkRecord",
    "ValueSerializationError",
]

__version__ = "1.0.0"
