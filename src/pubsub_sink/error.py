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


class PubSubSinkError(Exception):
    """
    Base class for all errors raised by the Pub/Sub sink.
    """
    pass


class ConfigurationError(PubSubSinkError, ValueError):
    """
    Raised when the sink configuration is missing a required property or
    holds a value of the wrong type or range.
    """
    pass


class RecordValidationError(PubSubSinkError):
    """
    Raised when a single inbound record can not be turned into a Pub/Sub
    message, for example because its payload is not bytes.

    The error is permanent for that record: retrying it will fail the same
    way. Buffers of other partitions are left untouched.

    Args:
        reason (str): Human readable description of the problem.

        record (object, optional): The offending record.

        exception (Exception, optional): The original exception.

    """
    def __init__(self, reason, record=None, exception=None):
        super(RecordValidationError, self).__init__(reason)
        self.record = record
        self.exception = exception


class SerializationError(PubSubSinkError):
    """Generic error from serializer package"""
    pass


class ValueSerializationError(RecordValidationError):
    """
    Wraps all errors encountered during the serialization of a record value.

    Args:
        exception (Exception): The exception that occurred during serialization.

        record (object, optional): The record whose value failed to serialize.
    """
    def __init__(self, exception=None, record=None):
        super(ValueSerializationError, self).__init__(
            "Failed to serialize record value: {!r}".format(exception),
            record=record, exception=exception)


class PublishError(PubSubSinkError):
    """
    Wraps a transport failure reported for one publish request.

    A publish failure is fatal for the sink task: once recorded, every
    following ``submit``, ``drain``, ``put`` or ``flush`` call raises it.
    Requests that completed before the failure are not rolled back.

    Args:
        topic (str): Destination topic path of the failed request.

        partition_key (PartitionKey): Source topic and partition of the batch.

        batch_info (str): Description of the failed batch.

        exception (Exception, optional): The original transport exception.

    """
    def __init__(self, topic, partition_key, batch_info, exception=None):
        super(PublishError, self).__init__(
            "Failed to publish {} to {}: {!r}".format(batch_info, topic, exception))
        self.topic = topic
        self.partition_key = partition_key
        self.batch_info = batch_info
        self.exception = exception
