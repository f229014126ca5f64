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

# Document store collections.
PROPERTIES_COLLECTION = "properties"
USERS_COLLECTION = "users"
CHATS_COLLECTION = "chats"
CHAT_PAIRS_COLLECTION = "chatPairs"
IRONING_ORDERS_COLLECTION = "ironingOrders"
IRONING_PROFILES_COLLECTION = "ironingProfiles"
CLOTHES_COLLECTION = "clothes"
DEFAULT_PRICES_DOCUMENT = "defaultPrices"
COUNTERS_COLLECTION = "counters"
IRONING_ORDERS_COUNTER_DOCUMENT = "ironingOrders"

# Realtime presence key prefix, e.g. "status/<uid>".
PRESENCE_KEY_PREFIX = "status/"

PLACEHOLDER_AVATAR = "https://placehold.co/100x100.png"
PLACEHOLDER_PROPERTY_IMAGE = "https://placehold.co/1080x1920.png"

DEFAULT_SEEKER_CRITERIA = "I am looking for a new property."
DEFAULT_MATCH_CRITERIA = (
    "A great property with good amenities in a nice neighborhood."
)
DEFAULT_BIO = "Welcome to LOKALITY!"
DEFAULT_USER_NAME = "New User"
CHAT_STARTED_TEXT = "Chat started."

SEARCH_HISTORY_LIMIT = 5

MAX_PRICE_SALE = 50_000_000
MAX_PRICE_RENT = 300_000
PRICE_STEP_SALE = 100_000
PRICE_STEP_RENT = 5_000

MAX_CHAT_MESSAGE_LENGTH = 2000
MAX_DESCRIPTION_LENGTH = 4000
MAX_SEARCH_CRITERIA_LENGTH = 1000

# Default ironing price list: (name, price, category).
DEFAULT_CLOTHES_PRICES = [
    ("Shirt", 15, "men"),
    ("T-Shirt", 10, "men"),
    ("Trousers", 20, "men"),
    ("Jeans", 20, "men"),
    ("Kurta", 25, "men"),
    ("Pyjama", 15, "men"),
    ("Top", 15, "women"),
    ("Saree", 50, "women"),
    ("Blouse", 10, "women"),
    ("Kurti", 20, "women"),
    ("Dress", 30, "women"),
    ("Leggings", 10, "women"),
    ("Shirt", 8, "kids"),
    ("Frock", 15, "kids"),
    ("Shorts", 7, "kids"),
    ("Pants", 10, "kids"),
]
