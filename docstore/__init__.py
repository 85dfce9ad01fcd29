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

import importlib.metadata


def get_version() -> str:
    try:
        return importlib.metadata.version(__package__)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


__version__: str = get_version()


import docstore.constants  # noqa: E402
import docstore.exceptions  # noqa: F401, E402
from docstore.client import StoreBinding, StoreClient  # noqa: E402
from docstore.data.store import DocumentStore  # noqa: E402
from docstore.data.utils.document_converters import TypedRecord  # noqa: E402
from docstore.exceptions import OperationContext  # noqa: E402
from docstore.info import IndexInfo  # noqa: E402
from docstore.results import ChangeInfo  # noqa: E402
from docstore.utils.store_options import (  # noqa: E402
    FullStoreOptions,
    StoreOptions,
)

__all__ = [
    "ChangeInfo",
    "DocumentStore",
    "FullStoreOptions",
    "IndexInfo",
    "OperationContext",
    "StoreBinding",
    "StoreClient",
    "StoreOptions",
    "TypedRecord",
    "__version__",
]


__pdoc__ = {
    "client": False,
    "settings": False,
    "utils": False,
}
