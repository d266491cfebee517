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

from typing import Any, List

from ..error import ConfigurationError


class ValidationUtil:
    @staticmethod
    def check_multiple_not_none(obj: Any, vars_to_check: List[str]) -> None:
        for param in vars_to_check:
            ValidationUtil.check_not_none(obj, param)

    @staticmethod
    def check_not_none(obj: Any, param: str) -> None:
        if getattr(obj, param) is None:
            raise ConfigurationError("Expected %s to be not None" % (param,))

    @staticmethod
    def check_multiple_is_string(obj: Any, vars_to_check: List[str]) -> None:
        for param in vars_to_check:
            ValidationUtil.check_is_string(obj, param)

    @staticmethod
    def check_is_string(obj: Any, param: str) -> None:
        param_value = getattr(obj, param)
        if param_value is not None and not isinstance(param_value, str):
            raise ConfigurationError("Expected %s to be a string" % (param,))

    @staticmethod
    def check_multiple_is_positive_int(obj: Any, vars_to_check: List[str]) -> None:
        for param in vars_to_check:
            ValidationUtil.check_is_positive_int(obj, param)

    @staticmethod
    def check_is_positive_int(obj: Any, param: str) -> None:
        param_value = getattr(obj, param)
        if isinstance(param_value, bool) or not isinstance(param_value, int):
            raise ConfigurationError("Expected %s to be an int" % (param,))
        if param_value < 1:
            raise ConfigurationError("Expected %s to be at least 1" % (param,))

    @staticmethod
    def check_is_callable(obj: Any, param: str) -> None:
        if not callable(getattr(obj, param)):
            raise ConfigurationError("Expected %s to be callable" % (param,))
