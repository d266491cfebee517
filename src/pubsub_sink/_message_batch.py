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

from typing import List, Mapping, NamedTuple, Sequence

from google.pubsub_v1.types import PubsubMessage


class PartitionKey(NamedTuple):
    """Source topic and partition a message was read from"""
    topic: str
    partition: int


class SinkMessage(NamedTuple):
    """Immutable message waiting to be published

    ``size`` is the number of bytes the message contributes to the request
    size accounting. It is computed once, when the message is built.
    """
    data: bytes
    attributes: Mapping[str, str]
    size: int

    def to_pubsub_message(self) -> PubsubMessage:
        return PubsubMessage(data=self.data, attributes=dict(self.attributes))


class PublishBatch(NamedTuple):
    """Immutable group of messages published in a single request

    All messages come from the same source partition and are kept in the
    order they were submitted.
    """
    topic: str                                    # Destination topic path
    partition_key: PartitionKey                   # Source of the messages
    messages: Sequence[SinkMessage]               # Messages in arrival order
    sequence: int = 0                             # Chunk index within one flush

    @property
    def size(self) -> int:
        """Get the number of messages in this batch"""
        return len(self.messages)

    @property
    def byte_size(self) -> int:
        """Get the accounted byte size of this batch"""
        return sum(message.size for message in self.messages)

    @property
    def info(self) -> str:
        """Get a string representation of batch info"""
        return (f"PublishBatch(source='{self.partition_key.topic}', "
                f"partition={self.partition_key.partition}, sequence={self.sequence}, "
                f"size={len(self.messages)}, bytes={self.byte_size})")

    def to_pubsub_messages(self) -> List[PubsubMessage]:
        return [message.to_pubsub_message() for message in self.messages]


def create_publish_batch(topic: str,
                         partition_key: PartitionKey,
                         messages: Sequence[SinkMessage],
                         sequence: int = 0) -> PublishBatch:
    """Create an immutable PublishBatch from a sequence of messages

    Args:
        topic: Destination topic path
        partition_key: Source topic and partition of the messages
        messages: Messages in arrival order
        sequence: Chunk index within the flush that produced the batch

    Returns:
        PublishBatch: Immutable batch object
    """
    return PublishBatch(
        topic=topic,
        partition_key=partition_key,
        messages=tuple(messages) if not isinstance(messages, tuple) else messages,
        sequence=sequence
    )
