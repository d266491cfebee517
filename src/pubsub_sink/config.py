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

from ._util.validation_util import ValidationUtil
from .error import ConfigurationError
from .serialization import BytesSerializer

TOPIC_FORMAT = "projects/{}/topics/{}"

DEFAULT_MIN_BATCH_SIZE = 100
DEFAULT_MAX_REQUEST_BYTES = (10 << 20) - 1024  # Leave a little room for overhead.
DEFAULT_MAX_MESSAGES_PER_REQUEST = 1000
DEFAULT_PUBLISHER_POOL_SIZE = 10

_INT_PROPERTIES = {
    'min.batch.size': 'min_batch_size',
    'max.request.bytes': 'max_request_bytes',
    'max.messages.per.request': 'max_messages_per_request',
    'publisher.pool.size': 'publisher_pool_size',
}

_KNOWN_PROPERTIES = frozenset(['cps.project', 'cps.topic', 'cps.endpoint',
                               'publisher.shared', 'credentials',
                               'value.serializer']) | frozenset(_INT_PROPERTIES)


def _to_int(name, value):
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ConfigurationError("Expected %s to be an int, got %r" % (name, value))
    return value


def _to_bool(name, value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
        return value.strip().lower() == 'true'
    raise ConfigurationError("Expected %s to be a bool, got %r" % (name, value))


class SinkConfig(object):
    """
    Validated configuration of a Pub/Sub sink task.

    Notable configuration properties (* indicates required field)

    +------------------------------+----------------+-----------------------------------------------+
    | Property Name                | Type           | Description                                   |
    +==============================+================+===============================================+
    | ``cps.project`` *            | str            | Destination Google Cloud project.             |
    +------------------------------+----------------+-----------------------------------------------+
    | ``cps.topic`` *              | str            | Destination Pub/Sub topic.                    |
    +------------------------------+----------------+-----------------------------------------------+
    | ``min.batch.size``           | int            | Publish a partition once it holds this many   |
    |                              |                | messages. Defaults to 100.                    |
    +------------------------------+----------------+-----------------------------------------------+
    | ``max.request.bytes``        | int            | Byte ceiling of one publish request.          |
    |                              |                | Defaults to 10 MiB minus 1 KiB.               |
    +------------------------------+----------------+-----------------------------------------------+
    | ``max.messages.per.request`` | int            | Message ceiling of one publish request.       |
    |                              |                | Defaults to 1000.                             |
    +------------------------------+----------------+-----------------------------------------------+
    | ``publisher.pool.size``      | int            | Number of publishers used round-robin.        |
    |                              |                | Defaults to 10.                               |
    +------------------------------+----------------+-----------------------------------------------+
    | ``publisher.shared``         | bool           | Share one publisher pool per destination      |
    |                              |                | across all tasks of the process.              |
    +------------------------------+----------------+-----------------------------------------------+
    | ``cps.endpoint``             | str            | Endpoint override. ``emulator:///host:port``  |
    |                              |                | selects a Pub/Sub emulator.                   |
    +------------------------------+----------------+-----------------------------------------------+
    | ``credentials``              | Credentials    | Explicit google.auth credentials.             |
    +------------------------------+----------------+-----------------------------------------------+
    | ``value.serializer``         | callable       | Callable(obj, SerializationContext) -> bytes  |
    |                              |                | Defaults to BytesSerializer.                  |
    +------------------------------+----------------+-----------------------------------------------+

    Integer and boolean properties may also be given as strings, as host
    frameworks commonly pass every property as a string.
    """

    def __init__(self, project, topic, min_batch_size=DEFAULT_MIN_BATCH_SIZE,
                 max_request_bytes=DEFAULT_MAX_REQUEST_BYTES,
                 max_messages_per_request=DEFAULT_MAX_MESSAGES_PER_REQUEST,
                 publisher_pool_size=DEFAULT_PUBLISHER_POOL_SIZE,
                 publisher_shared=False, endpoint=None, credentials=None,
                 value_serializer=None):
        self.project = project
        self.topic = topic
        self.min_batch_size = min_batch_size
        self.max_request_bytes = max_request_bytes
        self.max_messages_per_request = max_messages_per_request
        self.publisher_pool_size = publisher_pool_size
        self.publisher_shared = publisher_shared
        self.endpoint = endpoint
        self.credentials = credentials
        self.value_serializer = value_serializer if value_serializer is not None else BytesSerializer()
        self._validate()

    @classmethod
    def from_dict(cls, conf):
        """
        Build a SinkConfig from a dict of dotted property names.

        Args:
            conf (dict): Sink configuration properties.

        Raises:
            ConfigurationError: If a property is unknown, missing or invalid.

        Returns:
            SinkConfig: The validated configuration.
        """
        unknown = set(conf) - _KNOWN_PROPERTIES
        if unknown:
            raise ConfigurationError("Unrecognized properties: {}".format(", ".join(sorted(unknown))))

        kwargs = {
            'project': conf.get('cps.project'),
            'topic': conf.get('cps.topic'),
            'endpoint': conf.get('cps.endpoint'),
            'credentials': conf.get('credentials'),
            'value_serializer': conf.get('value.serializer'),
        }
        for name, attr in _INT_PROPERTIES.items():
            if name in conf:
                kwargs[attr] = _to_int(name, conf[name])
        if 'publisher.shared' in conf:
            kwargs['publisher_shared'] = _to_bool('publisher.shared', conf['publisher.shared'])
        return cls(**kwargs)

    @property
    def topic_path(self):
        """Fully qualified destination topic name"""
        return TOPIC_FORMAT.format(self.project, self.topic)

    def _validate(self):
        ValidationUtil.check_multiple_not_none(self, ['project', 'topic'])
        ValidationUtil.check_multiple_is_string(self, ['project', 'topic', 'endpoint'])
        ValidationUtil.check_multiple_is_positive_int(self, list(_INT_PROPERTIES.values()))
        ValidationUtil.check_is_callable(self, 'value_serializer')
        if not isinstance(self.publisher_shared, bool):
            raise ConfigurationError("Expected publisher_shared to be a bool")

    def __repr__(self):
        return ("SinkConfig(topic_path={!r}, min_batch_size={}, max_request_bytes={}, "
                "max_messages_per_request={}, publisher_pool_size={}, publisher_shared={})".format(
                    self.topic_path, self.min_batch_size, self.max_request_bytes,
                    self.max_messages_per_request, self.publisher_pool_size, self.publisher_shared))
