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
"""Generates listing descriptions from structured property data."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from models import api_config
from models import gemini
from models import prompts

logger = logging.getLogger(__name__)


@dataclass
class PropertyDescriptionInput:
    """All fields are optional so a description can be drafted from partial data."""

    price_type: Optional[str] = None
    price_amount: Optional[float] = None
    location: Optional[str] = None
    society_name: Optional[str] = None
    property_type: Optional[str] = None
    configuration: Optional[str] = None
    floor_no: Optional[int] = None
    total_floors: Optional[int] = None
    super_built_up_area: Optional[float] = None
    carpet_area: Optional[float] = None
    main_door_direction: Optional[str] = None
    has_balcony: Optional[bool] = None
    amenities: List[str] = field(default_factory=list)


@dataclass
class PropertyDescriptionOutput:
    description: str
    # False when the template was used instead of model output.
    generated: bool = True


def get_detail_lines(input: PropertyDescriptionInput) -> List[str]:
    """Returns one line per present detail; falsy values are left out."""
    lines = []
    if input.price_type:
        lines.append(f"Listing for: {input.price_type}")
    if input.price_amount:
        lines.append(f"Price: {input.price_amount}")
    if input.location:
        lines.append(f"Location: {input.location}")
    if input.society_name:
        lines.append(f"Society/Building: {input.society_name}")
    if input.property_type:
        lines.append(f"Property Type: {input.property_type}")
    if input.configuration:
        lines.append(f"Configuration: {input.configuration}")
    if input.floor_no:
        floor = f"Floor: {input.floor_no}"
        if input.total_floors:
            floor += f" out of {input.total_floors}"
        lines.append(floor)
    if input.super_built_up_area:
        lines.append(f"Super Built-up Area: {input.super_built_up_area} sqft")
    if input.carpet_area:
        lines.append(f"Carpet Area: {input.carpet_area} sqft")
    if input.main_door_direction:
        lines.append(f"Main Door Facing: {input.main_door_direction}")
    if input.has_balcony:
        lines.append("Has Balcony: Yes")
    if input.amenities:
        lines.append(f"Key Amenities: {', '.join(input.amenities)}")
    return lines


def fallback_description(input: PropertyDescriptionInput) -> str:
    location = f" in {input.location}" if input.location else ""
    return (
        f"This is a {input.configuration or 'property'} {input.property_type or ''}"
        f" in {input.society_name or 'a prime location'},"
        f" available for {input.price_type or 'rent/sale'}{location}."
        " For complete details, please contact the lister."
    )


def generate_property_description(
    input: PropertyDescriptionInput, api_key: str | None = None
) -> PropertyDescriptionOutput:
    """
    Drafts a listing description with Gemini.

    Any failure (error, empty output, safety block) falls back to a simple
    template built from the same input, so callers always get a description.
    """
    prompt = prompts.make_property_description_prompt(get_detail_lines(input))
    try:
        description = gemini.call_predict(prompt, api_key=api_key).strip()
        if description:
            return PropertyDescriptionOutput(description=description)
        logger.warning("AI output was empty, generating fallback.")
    except Exception as e:
        logger.error(
            "AI prompt call failed, generating fallback description: %s", e
        )
    return PropertyDescriptionOutput(
        description=fallback_description(input), generated=False
    )


def generate_property_description_action(
    input: PropertyDescriptionInput,
) -> Optional[PropertyDescriptionOutput]:
    """Returns None when AI features are disabled or the flow itself fails."""
    if not api_config.is_ai_enabled():
        logger.warning("AI features are disabled. Missing GOOGLE_API_KEY.")
        return None
    try:
        return generate_property_description(input)
    except Exception:
        logger.exception("Error in generate_property_description_action")
        return None
