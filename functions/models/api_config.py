# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

import os

# Set at startup from settings; the environment is the fallback.
DEFAULT_API_KEY: str | None = os.environ.get("GOOGLE_API_KEY")
DEFAULT_MODEL = "gemini-2.0-flash"


def is_ai_enabled() -> bool:
    return bool(DEFAULT_API_KEY)
