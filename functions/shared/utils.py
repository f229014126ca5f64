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

import uuid
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

CRORE = 10_000_000
LAKH = 100_000


def get_unique_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def group_indian_digits(amount: int) -> str:
    """Formats an integer with Indian digit grouping, e.g. 1234567 -> 12,34,567."""
    sign = "-" if amount < 0 else ""
    digits = str(abs(int(amount)))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


def _fixed(value: float, places: int) -> str:
    """Fixed-point text with exact halves rounded up, e.g. 2.5 -> "3"."""
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def format_indian_currency(amount: float) -> str:
    if amount >= CRORE:
        return f"₹ {_fixed(amount / CRORE, 2)} Cr"
    if amount >= LAKH:
        return f"₹ {_fixed(amount / LAKH, 0)} Lakh"
    return f"₹ {group_indian_digits(round(amount))}"


def format_rent(amount: float) -> str:
    return f"₹ {group_indian_digits(round(amount))}/mo"


def parse_timestamp(value: Any) -> datetime | None:
    """
    Normalizes stored timestamps to aware UTC datetimes.

    Accepts datetimes (including Firestore's DatetimeWithNanoseconds),
    ISO-8601 strings, and epoch milliseconds.
    """
    if value is None or isinstance(value, datetime) and value.tzinfo:
        return value
    if isinstance(value, datetime):
        return value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    raise TypeError(f"Unsupported timestamp value: {value!r}")


def to_jsonable(obj: Any) -> Any:
    """Recursively converts datetimes to ISO strings and enums to their values."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {key: to_jsonable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    return obj
