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

from types import MappingProxyType
from typing import Any, NamedTuple, Optional

from ._message_batch import SinkMessage
from .error import RecordValidationError, ValueSerializationError
from .serialization import BytesSerializer, SerializationContext

PARTITION_ATTRIBUTE = "kafka.partition"
KAFKA_TOPIC_ATTRIBUTE = "kafka.topic"
KEY_ATTRIBUTE = "key"


class SinkRecord(NamedTuple):
    """A record delivered to the sink by the host framework"""
    topic: str
    partition: int
    value: Any
    key: Optional[Any] = None


class RecordConverter(object):
    """
    Turns SinkRecords into SinkMessages ready for batching.

    The record value is serialized with the configured value serializer. The
    source partition, source topic and, when present, the record key are
    attached as message attributes. The accounted message size is the data
    length plus the length of every attribute name and value; key characters
    count two bytes each, the most a key character takes to encode.

    Args:
        value_serializer (callable, optional): Callable(obj,
            SerializationContext) -> bytes. Defaults to BytesSerializer.

    """
    def __init__(self, value_serializer=None):
        self._value_serializer = value_serializer if value_serializer is not None else BytesSerializer()

    def convert(self, record):
        """
        Convert one record.

        Args:
            record (SinkRecord): Record to convert.

        Raises:
            RecordValidationError: If the record topic or partition is malformed.

            ValueSerializationError: If the record value can not be serialized.

        Returns:
            SinkMessage: The message to submit for ``record``.
        """
        if not isinstance(record.topic, str) or not record.topic:
            raise RecordValidationError("Unexpected record topic {!r}".format(record.topic), record=record)
        if isinstance(record.partition, bool) or not isinstance(record.partition, int):
            raise RecordValidationError("Unexpected record partition {!r}".format(record.partition), record=record)

        ctx = SerializationContext(record.topic, record.partition)
        try:
            data = self._value_serializer(record.value, ctx)
        except Exception as se:
            raise ValueSerializationError(se, record=record)
        if not isinstance(data, bytes):
            raise ValueSerializationError(
                TypeError("serializer returned {}".format(type(data).__name__)), record=record)

        partition = str(record.partition)
        attributes = {
            PARTITION_ATTRIBUTE: partition,
            KAFKA_TOPIC_ATTRIBUTE: record.topic,
        }
        size = (len(data) + len(PARTITION_ATTRIBUTE) + len(partition)
                + len(KAFKA_TOPIC_ATTRIBUTE) + len(record.topic))
        if record.key is not None:
            key = str(record.key)
            attributes[KEY_ATTRIBUTE] = key
            size += len(KEY_ATTRIBUTE) + 2 * len(key)

        return SinkMessage(data=data, attributes=MappingProxyType(attributes), size=size)
