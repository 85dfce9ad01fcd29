# Copyright DataStax, Inc.
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

from __future__ import annotations

import warnings
from functools import wraps
from typing import Any, Callable, TypeVar

from deprecation import DeprecatedWarning
from typing_extensions import Concatenate, ParamSpec  # compatible with pre-3.10 Python

P = ParamSpec("P")
R = TypeVar("R")
S = TypeVar("S")

DEPRECATED_IN = "0.2.0"
REMOVED_IN = "1.0.0"


def deprecated_alias(
    new_name: str,
) -> Callable[[Callable[Concatenate[S, P], R]], Callable[Concatenate[S, P], R]]:
    """
    Turn a method into a deprecated alias of method `new_name` of the same
    class. The decorated method body is not used: calls are forwarded
    to the new method after issuing a DeprecatedWarning.
    """

    def _decorator(
        method: Callable[Concatenate[S, P], R],
    ) -> Callable[Concatenate[S, P], R]:
        @wraps(method)
        def wrapper(self: S, *args: P.args, **kwargs: P.kwargs) -> R:
            the_warning = DeprecatedWarning(
                f"Method '{method.__name__}'",
                deprecated_in=DEPRECATED_IN,
                removed_in=REMOVED_IN,
                details=f"Please use '{new_name}' instead.",
            )
            warnings.warn(
                the_warning,
                stacklevel=2,
            )
            new_method: Callable[..., Any] = getattr(self, new_name)
            return new_method(*args, **kwargs)  # type: ignore[no-any-return]

        return wrapper

    return _decorator
