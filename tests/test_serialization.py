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

from pubsub_sink.serialization import (BytesSerializer, SerializationContext,
                                       SerializationError, Serializer,
                                       StringSerializer)


@pytest.mark.parametrize("value", [b'abc', bytearray(b'abc'), memoryview(b'abc')])
def test_bytes_serializer(value):
    data = BytesSerializer()(value, SerializationContext('src', 0))

    assert data == b'abc'
    assert type(data) is bytes


@pytest.mark.parametrize("value", ['abc', 1, None, [1, 2]])
def test_bytes_serializer_rejects(value):
    with pytest.raises(SerializationError):
        BytesSerializer()(value)


@pytest.mark.parametrize("codec, data", [
    ('utf_8', 'Jämtland'.encode('utf_8')),
    ('utf_16', 'Jämtland'.encode('utf_16')),
    ('cp1252', 'Jämtland'.encode('cp1252')),
])
def test_string_serializer_codec(codec, data):
    assert StringSerializer(codec)('Jämtland') == data


def test_string_serializer_errors():
    with pytest.raises(SerializationError):
        StringSerializer()(b'bytes')
    with pytest.raises(SerializationError):
        StringSerializer('ascii')('Jämtland')


def test_serializer_base_is_abstract():
    with pytest.raises(NotImplementedError):
        Serializer()('x', None)


def test_serialization_context():
    ctx = SerializationContext('src', 7)

    assert (ctx.topic, ctx.partition) == ('src', 7)
    with pytest.raises(AttributeError):
        ctx.headers = {}
