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

from shared import utils


class FormatIndianCurrencyTest(unittest.TestCase):

    def test_small_amounts_use_indian_grouping(self):
        self.assertEqual(utils.format_indian_currency(45000), "₹ 45,000")
        self.assertEqual(utils.format_rent(65000), "₹ 65,000/mo")

    def test_lakh_halves_round_up(self):
        """Exact halves round away from zero, matching the web client."""
        self.assertEqual(utils.format_indian_currency(250000), "₹ 3 Lakh")
        self.assertEqual(utils.format_indian_currency(450000), "₹ 5 Lakh")
        self.assertEqual(utils.format_indian_currency(240000), "₹ 2 Lakh")
        self.assertEqual(utils.format_indian_currency(300000), "₹ 3 Lakh")

    def test_crore_halves_round_up(self):
        self.assertEqual(utils.format_indian_currency(11250000), "₹ 1.13 Cr")
        self.assertEqual(utils.format_indian_currency(50000000), "₹ 5.00 Cr")
        self.assertEqual(utils.format_indian_currency(25000000), "₹ 2.50 Cr")


if __name__ == "__main__":
    unittest.main()
