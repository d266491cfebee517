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

import pytest

from pubsub_sink import ConfigurationError, SinkConfig
from pubsub_sink.config import (DEFAULT_MAX_MESSAGES_PER_REQUEST,
                                DEFAULT_MAX_REQUEST_BYTES,
                                DEFAULT_MIN_BATCH_SIZE,
                                DEFAULT_PUBLISHER_POOL_SIZE)
from pubsub_sink.serialization import BytesSerializer, StringSerializer


def base_conf(**overrides):
    conf = {'cps.project': 'test-project', 'cps.topic': 'test-topic'}
    conf.update(overrides)
    return conf


def test_conf_defaults():
    config = SinkConfig.from_dict(base_conf())

    assert config.topic_path == 'projects/test-project/topics/test-topic'
    assert config.min_batch_size == DEFAULT_MIN_BATCH_SIZE
    assert config.max_request_bytes == DEFAULT_MAX_REQUEST_BYTES == 10 * 1024 * 1024 - 1024
    assert config.max_messages_per_request == DEFAULT_MAX_MESSAGES_PER_REQUEST == 1000
    assert config.publisher_pool_size == DEFAULT_PUBLISHER_POOL_SIZE == 10
    assert config.publisher_shared is False
    assert config.endpoint is None
    assert config.credentials is None
    assert isinstance(config.value_serializer, BytesSerializer)


def test_conf_string_values():
    """
    Host frameworks hand over every property as a string
    """
    config = SinkConfig.from_dict(base_conf(**{
        'min.batch.size': '5',
        'max.request.bytes': ' 2048 ',
        'max.messages.per.request': '10',
        'publisher.pool.size': '2',
        'publisher.shared': 'True',
    }))

    assert config.min_batch_size == 5
    assert config.max_request_bytes == 2048
    assert config.max_messages_per_request == 10
    assert config.publisher_pool_size == 2
    assert config.publisher_shared is True


def test_conf_custom_serializer():
    serializer = StringSerializer()
    config = SinkConfig.from_dict(base_conf(**{'value.serializer': serializer}))

    assert config.value_serializer is serializer


def test_conf_unknown_property():
    """
    Unknown configs should raise ConfigurationError
    """
    with pytest.raises(ConfigurationError) as ce:
        SinkConfig.from_dict(base_conf(whatamIdoingHere='noidea'))
    assert 'whatamIdoingHere' in str(ce.value)


@pytest.mark.parametrize("conf, contains", [
    ({'cps.topic': 'test-topic'}, 'project'),
    ({'cps.project': 'test-project'}, 'topic'),
    (base_conf(**{'cps.project': 42}), 'project'),
    (base_conf(**{'min.batch.size': 0}), 'min_batch_size'),
    (base_conf(**{'min.batch.size': 'many'}), 'min.batch.size'),
    (base_conf(**{'max.request.bytes': -1}), 'max_request_bytes'),
    (base_conf(**{'max.messages.per.request': 1.5}), 'max_messages_per_request'),
    (base_conf(**{'publisher.pool.size': True}), 'publisher_pool_size'),
    (base_conf(**{'publisher.shared': 'sometimes'}), 'publisher.shared'),
    (base_conf(**{'value.serializer': 'bytes'}), 'value_serializer'),
])
def test_conf_invalid(conf, contains):
    with pytest.raises(ConfigurationError) as ce:
        SinkConfig.from_dict(conf)
    assert contains in str(ce.value)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        SinkConfig.from_dict({})
