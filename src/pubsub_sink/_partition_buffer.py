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

from typing import List

from ._message_batch import SinkMessage


class PartitionBuffer:
    """Unpublished messages of a single source partition

    Holds the messages in arrival order together with the total of their
    accounted sizes. A buffer is owned by one dispatcher and is never
    accessed concurrently.
    """

    def __init__(self):
        self._messages: List[SinkMessage] = []
        self._pending_bytes = 0

    @property
    def pending_bytes(self) -> int:
        return self._pending_bytes

    def would_overflow(self, message: SinkMessage, max_bytes: int) -> bool:
        """Check whether appending ``message`` would exceed ``max_bytes``"""
        return self._pending_bytes + message.size > max_bytes

    def append(self, message: SinkMessage) -> None:
        self._messages.append(message)
        self._pending_bytes += message.size

    def take(self) -> List[SinkMessage]:
        """Remove and return all buffered messages, leaving the buffer empty"""
        messages = self._messages
        self._messages = []
        self._pending_bytes = 0
        return messages

    def is_empty(self) -> bool:
        return not self._messages

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"PartitionBuffer(messages={len(self._messages)}, pending_bytes={self._pending_bytes})"
