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

import re
from dataclasses import asdict
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Type, TypeVar

from dacite import Config, from_dict

from shared.utils import parse_timestamp, to_jsonable

T = TypeVar("T")

# Keys whose values are keyed by user ids or hold raw client payloads;
# their contents are stored verbatim.
VERBATIM_KEYS = frozenset({"participants", "filters"})

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[0-9])|(?<=[a-z0-9])(?=[A-Z])")

DACITE_CONFIG = Config(
    check_types=False,
    cast=[Enum],
    type_hooks={datetime: parse_timestamp},
)


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def convert_keys(
    obj: Any, direction: Literal["camel_to_snake", "snake_to_camel"]
) -> Any:
    """Recursively converts dict keys between camelCase and snake_case."""
    convert = camel_to_snake if direction == "camel_to_snake" else snake_to_camel
    if isinstance(obj, dict):
        converted = {}
        for key, value in obj.items():
            new_key = convert(key) if isinstance(key, str) else key
            if new_key in VERBATIM_KEYS or key in VERBATIM_KEYS:
                converted[new_key] = value
            else:
                converted[new_key] = convert_keys(value, direction)
        return converted
    if isinstance(obj, list):
        return [convert_keys(item, direction) for item in obj]
    return obj


def to_document(record: Any, *, serialize_dates: bool = False) -> dict:
    """
    Converts a dataclass record to a camelCase document.

    `id` is dropped since it is the document key. Datetimes are kept as-is
    for stores with a native timestamp type unless `serialize_dates` is set.
    """
    data = asdict(record)
    data.pop("id", None)
    if serialize_dates:
        data = to_jsonable(data)
    else:
        data = _enum_values(data)
    return convert_keys(data, "snake_to_camel")


def from_document(data_class: Type[T], doc_id: str | None, data: dict) -> T:
    payload = convert_keys(data, "camel_to_snake")
    if doc_id is not None:
        payload["id"] = doc_id
    return from_dict(data_class=data_class, data=payload, config=DACITE_CONFIG)


def _enum_values(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {key: _enum_values(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_enum_values(item) for item in obj]
    return obj
