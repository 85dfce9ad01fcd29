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

import datetime

# Reserved document fields
DEFAULT_ID_FIELD = "_id"
CREATE_TIME_FIELD = "create_time"
UPDATE_TIME_FIELD = "update_time"

# Defaults for the timestamp policy
DEFAULT_UPDATE_TIME_AUTO = False
DEFAULT_INSERT_TIME_AUTO = False
DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_TIME_ZONE = datetime.timezone.utc

# Defaults for driver calls (a zero timeout means no deadline)
DEFAULT_TIMEOUT_MS = 0
DEFAULT_MONGO_URI = "mongodb://localhost:27017"

# Name of the table holding the store settings in a TOML configuration file
DEFAULT_TOML_SECTION = "docstore"

# Maximum length of the selector summaries shown in error messages
SELECTOR_SUMMARY_MAX_LENGTH = 120
