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

"""
Helpers to point a publisher at a local Pub/Sub emulator instead of the
production service.
"""

import os
from typing import Optional

EMULATOR_HOST_ENV = "PUBSUB_EMULATOR_HOST"
EMULATOR_ENDPOINT_PREFIX = "emulator:///"


def to_emulator_endpoint(endpoint: str) -> str:
    """Mark ``endpoint`` (``host:port``) as an emulator endpoint"""
    return EMULATOR_ENDPOINT_PREFIX + endpoint


def get_emulator_endpoint(endpoint: Optional[str] = None) -> Optional[str]:
    """
    Resolve the emulator ``host:port`` to connect to, if any.

    The ``PUBSUB_EMULATOR_HOST`` environment variable takes precedence over
    ``endpoint``. An ``endpoint`` only selects the emulator when it carries
    the ``emulator:///`` prefix.

    Args:
        endpoint (str, optional): Configured endpoint override.

    Returns:
        str: The emulator address, or None when the production service
        should be used.
    """
    emulator_endpoint = os.environ.get(EMULATOR_HOST_ENV)
    if emulator_endpoint:
        return emulator_endpoint
    if endpoint is not None and endpoint.startswith(EMULATOR_ENDPOINT_PREFIX):
        return endpoint[len(EMULATOR_ENDPOINT_PREFIX):]
    return None
