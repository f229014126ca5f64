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


import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from flows import match_score
from flows.match_score import PropertyMatchScoreInput, PropertyMatchScoreOutput
from shared.types import (
    Amenities,
    Lister,
    ListerType,
    Parking,
    Price,
    PriceType,
    Property,
)


def make_listing(price_type=PriceType.RENT, amount=45000) -> Property:
    return Property(
        id="p1",
        title="2BHK in Green Acres",
        description="",
        lister=Lister(id="l1", name="Priya", type=ListerType.OWNER),
        price=Price(type=price_type, amount=amount),
        location="HSR Layout",
        configuration="2bhk",
        property_type="apartment",
        posted_on=datetime(2025, 1, 1, tzinfo=timezone.utc),
        society_name="Green Acres",
        floor_no=3,
        total_floors=12,
        main_door_direction="east",
        parking=Parking(has_2_wheeler=True, has_4_wheeler=False),
        amenities=Amenities(has_lift=True, has_clubhouse=True),
    )


class BuildPropertyDetailsTest(unittest.TestCase):

    def test_rent_listing(self):
        details = match_score.build_property_details(make_listing())
        lines = details.split("\n")
        self.assertEqual(
            lines[0],
            "This is a 2bhk apartment for rent at Green Acres, HSR Layout.",
        )
        self.assertIn("Price: ₹ 45,000/mo.", lines)
        self.assertIn("Floor: 3 of 12.", lines)
        self.assertIn("Parking: No Car, Bike.", lines)
        self.assertIn("Key Amenities: Lift, Clubhouse.", lines)

    def test_sale_listing_uses_lakh_and_crore(self):
        details = match_score.build_property_details(
            make_listing(PriceType.SALE, 25000000)
        )
        self.assertIn("Price: ₹ 2.50 Cr.", details)


class PropertyMatchScoreTest(unittest.TestCase):

    def setUp(self):
        self.input = PropertyMatchScoreInput(
            property_details="This is a 2bhk apartment for rent.",
            search_criteria="2bhk with a lift",
        )

    @patch("flows.match_score.gemini.call_predict_with_schema")
    def test_score_is_clamped(self, mock_call):
        mock_call.return_value = PropertyMatchScoreOutput(
            match_score=140, matches=["2bhk"], mismatches=[]
        )
        result = match_score.property_match_score(self.input)
        self.assertEqual(result.match_score, 100)
        self.assertEqual(result.matches, ["2bhk"])
        prompt = mock_call.call_args.args[0]
        self.assertIn("2bhk with a lift", prompt)

    @patch("flows.match_score.api_config.is_ai_enabled", return_value=False)
    def test_disabled_returns_none(self, _):
        self.assertIsNone(match_score.get_property_match_score(self.input))

    @patch("flows.match_score.gemini.call_predict_with_schema", return_value=None)
    @patch("flows.match_score.api_config.is_ai_enabled", return_value=True)
    def test_invalid_response_returns_none(self, *_):
        self.assertIsNone(match_score.get_property_match_score(self.input))

    @patch("flows.match_score.gemini.call_predict_with_schema")
    @patch("flows.match_score.api_config.is_ai_enabled", return_value=True)
    def test_enabled(self, _, mock_call):
        mock_call.return_value = PropertyMatchScoreOutput(match_score=72)
        result = match_score.get_property_match_score(self.input)
        self.assertEqual(result.match_score, 72)
        self.assertEqual(result.mismatches, [])


if __name__ == "__main__":
    unittest.main()
