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

from typing import List

PROPERTY_DESCRIPTION_PROMPT = """You are an expert real estate copywriter. Your task is to generate a compelling and attractive property listing description based on the structured data provided.

The tone should be professional yet inviting. Highlight the key selling points without being overly verbose. Aim for a description between 50 to 100 words.

Focus on creating a narrative that helps a potential buyer or renter envision themselves living in the property.

**CRITICAL INSTRUCTIONS:**
- Your entire response MUST be only the description text. Do NOT include any JSON formatting, markdown, or other explanatory text.
- Even if details are sparse, create the best possible description. If no details are provided at all, you can write something like: "A property with great potential. Contact the lister for more details."

Here are the available property details to use:
{details_string}

Generate the description now."""

PROPERTY_MATCH_SCORE_PROMPT = """You are an AI expert in real estate property matching.

You will receive property details and user search criteria.
Your task is to:
1. Calculate a match score (0-100) indicating how well the property matches the search criteria.
2. Provide a list of "matches": specific property features that align with the user's search criteria.
3. Provide a list of "mismatches": specific property features that do not align with the user's search criteria.

Keep the reasons concise and to the point.

Property Details: {property_details}
Search Criteria: {search_criteria}"""


def make_property_description_prompt(detail_lines: List[str]) -> str:
    """Fills the description prompt with one "- Label: value" line per known detail."""
    return PROPERTY_DESCRIPTION_PROMPT.format(
        details_string="\n".join(f"- {line}" for line in detail_lines)
    )


def make_property_match_score_prompt(
    property_details: str, search_criteria: str
) -> str:
    return PROPERTY_MATCH_SCORE_PROMPT.format(
        property_details=property_details, search_criteria=search_criteria
    )
