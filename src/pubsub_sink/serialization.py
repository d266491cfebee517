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

from .error import SerializationError

__all__ = ['BytesSerializer', 'SerializationContext', 'SerializationError',
           'Serializer', 'StringSerializer']


class SerializationContext(object):
    """
    SerializationContext provides additional context to the serializer about
    the data it's serializing.

    Args:
        topic (str): Source topic of the record being serialized.

        partition (int): Source partition of the record being serialized.

    """
    __slots__ = ["topic", "partition"]

    def __init__(self, topic, partition):
        self.topic = topic
        self.partition = partition


class Serializer(object):
    """
    Extensible class from which all Serializer implementations derive.
    Serializers instruct the sink on how to convert record values to the
    bytes published as Pub/Sub message data.

    Note:
        This class is not directly instantiable. The derived classes must be
        used instead.

    Any callable with the same signature may be used in place of a
    Serializer instance.
    """
    def __call__(self, datum, ctx):
        """
        Converts datum to bytes.

        Args:
            datum (object): object to be serialized
            ctx (SerializationContext): Serialization context

        Raises:
            SerializationError if an error occurs during serialization

        Returns:
            bytes

        """
        raise NotImplementedError


class BytesSerializer(Serializer):
    """
    Passes bytes through unchanged and rejects every other type.

    This is the default value serializer: the sink publishes raw byte
    payloads and treats anything else as a malformed record.
    """
    def __call__(self, obj, ctx=None):
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return bytes(obj)
        raise SerializationError("BytesSerializer: unexpected value of type {}".format(type(obj).__name__))


class StringSerializer(Serializer):
    """
    Serializes unicode to bytes per the configured codec. Defaults to ``utf_8``.

    Args:
        codec (str, optional): encoding scheme. Defaults to utf_8
    """
    def __init__(self, codec='utf_8'):
        self.codec = codec

    def __call__(self, obj, ctx=None):
        if not isinstance(obj, str):
            raise SerializationError("Unsupported type {}".format(type(obj)))

        try:
            return obj.encode(self.codec)
        except UnicodeError as e:
            raise SerializationError(str(e))
