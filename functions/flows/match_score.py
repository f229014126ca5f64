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
"""Scores how well a property matches a seeker's search criteria."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field

from models import api_config
from models import gemini
from models import prompts
from shared.types import PriceType, Property
from shared.utils import format_indian_currency, format_rent

logger = logging.getLogger(__name__)


@dataclass
class PropertyMatchScoreInput:
    property_details: str
    search_criteria: str


class PropertyMatchScoreOutput(BaseModel):
    match_score: int = Field(
        description="A percentage score (0-100) indicating how well the property matches the search criteria."
    )
    matches: List[str] = Field(
        default_factory=list,
        description="A list of reasons why the property is a good match.",
    )
    mismatches: List[str] = Field(
        default_factory=list,
        description="A list of reasons why the property is not a good match.",
    )


def price_display(property: Property) -> str:
    if property.price.type == PriceType.RENT:
        return format_rent(property.price.amount)
    return format_indian_currency(property.price.amount)


def build_property_details(property: Property) -> str:
    """Summarizes a listing in plain sentences for the matching prompt."""
    amenities = [
        label
        for present, label in (
            (property.has_balcony, "Balcony"),
            (property.amenities.has_lift, "Lift"),
            (property.amenities.has_clubhouse, "Clubhouse"),
            (property.amenities.has_children_play_area, "Children's Play Area"),
            (property.amenities.has_gas_pipeline, "Gas Pipeline"),
        )
        if present
    ]
    society = f"{property.society_name}, " if property.society_name else ""
    car = "Car" if property.parking.has_4_wheeler else "No Car"
    bike = "Bike" if property.parking.has_2_wheeler else "No Bike"
    return "\n".join(
        [
            f"This is a {property.configuration} {property.property_type} for {property.price.type} at {society}{property.location}.",
            f"Price: {price_display(property)}.",
            f"Area: {property.area.super_built_up} sqft.",
            f"Floor: {property.floor_no} of {property.total_floors}.",
            f"Main door facing: {property.main_door_direction}.",
            f"Parking: {car}, {bike}.",
            f"Key Amenities: {', '.join(amenities) or 'None listed'}.",
        ]
    )


def property_match_score(
    input: PropertyMatchScoreInput, api_key: str | None = None
) -> PropertyMatchScoreOutput:
    prompt = prompts.make_property_match_score_prompt(
        input.property_details, input.search_criteria
    )
    result = gemini.call_predict_with_schema(
        prompt, PropertyMatchScoreOutput, api_key=api_key
    )
    if result is None:
        raise gemini.GeminiInvalidResponseException()
    result.match_score = max(0, min(100, result.match_score))
    return result


def get_property_match_score(
    input: PropertyMatchScoreInput,
) -> Optional[PropertyMatchScoreOutput]:
    """Returns None when AI features are disabled or scoring fails."""
    if not api_config.is_ai_enabled():
        logger.warning("AI features are disabled. Missing GOOGLE_API_KEY.")
        return None
    try:
        return property_match_score(input)
    except Exception:
        logger.exception("Error in get_property_match_score")
        return None
