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

import concurrent.futures
from threading import Lock

import pytest

from pubsub_sink import PublisherPool, SinkMessage


class RecordingPublisher(object):
    """
    Stands in for a PublisherHandle: records every batch and hands out
    futures that are either resolved immediately or left for the test to
    complete.
    """

    def __init__(self, auto_complete=True):
        self.auto_complete = auto_complete
        self.batches = []
        self.futures = []
        self.closed = False
        self._lock = Lock()

    @property
    def in_flight(self):
        return sum(1 for f in self.futures if not f.done())

    def publish(self, batch):
        future = concurrent.futures.Future()
        with self._lock:
            self.batches.append(batch)
            self.futures.append(future)
        if self.auto_complete:
            future.set_result(object())
        return future

    def complete_all(self, exception=None):
        for future in self.futures:
            if not future.done():
                if exception is not None:
                    future.set_exception(exception)
                else:
                    future.set_result(object())

    def close(self):
        self.closed = True


def make_message(size, data=None):
    """Build a SinkMessage accounted at exactly ``size`` bytes"""
    return SinkMessage(data=data if data is not None else b'x', attributes={}, size=size)


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def pending_publisher():
    return RecordingPublisher(auto_complete=False)


@pytest.fixture
def pool(publisher):
    return PublisherPool([publisher])


@pytest.fixture
def message_factory():
    return make_message


@pytest.fixture
def publisher_factory():
    return RecordingPublisher
