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

from enum import StrEnum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from shared.constants import PLACEHOLDER_PROPERTY_IMAGE


class PriceType(StrEnum):
    RENT = "rent"
    SALE = "sale"


class ListerType(StrEnum):
    OWNER = "owner"
    DEVELOPER = "developer"
    DEALER = "dealer"


class ProfileType(StrEnum):
    SEEKER = "seeker"
    OWNER = "owner"
    DEALER = "dealer"
    DEVELOPER = "developer"


class UserRole(StrEnum):
    ADMIN = "admin"
    SERVICE_PROVIDER = "service-provider"


class PropertyStatus(StrEnum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    ON_HOLD = "on-hold"
    PENDING_REVIEW = "pending-review"


class Configuration(StrEnum):
    STUDIO = "studio"
    ONE_BHK = "1bhk"
    TWO_BHK = "2bhk"
    THREE_BHK = "3bhk"
    FOUR_BHK = "4bhk"
    FIVE_BHK_PLUS = "5bhk+"


class PropertyType(StrEnum):
    APARTMENT = "apartment"
    VILLA = "villa"
    ROW_HOUSE = "row house"
    PENTHOUSE = "penthouse"
    INDEPENDENT_HOUSE = "independent house"
    BUILDER_FLOOR = "builder floor"


class DoorDirection(StrEnum):
    NORTH_EAST = "north-east"
    NORTH_WEST = "north-west"
    SOUTH_EAST = "south-east"
    SOUTH_WEST = "south-west"


class IroningOrderStatus(StrEnum):
    PLACED = "placed"
    PICKED_UP = "picked-up"
    PROCESSING = "processing"
    OUT_FOR_DELIVERY = "out-for-delivery"
    COMPLETED = "completed"


class PresenceStatus(StrEnum):
    ONLINE = "online"
    OFFLINE = "offline"


# --- Property ---


@dataclass
class Lister:
    id: str
    name: str
    type: ListerType
    avatar: Optional[str] = None
    phone: Optional[str] = None


@dataclass
class Price:
    type: PriceType
    amount: int


@dataclass
class Parking:
    has_2_wheeler: bool = False
    has_4_wheeler: bool = False


@dataclass
class Features:
    sunlight_enters_home: bool = False
    houses_on_same_floor: int = 0


@dataclass
class Amenities:
    has_lift: bool = False
    has_children_play_area: bool = False
    has_doctor_clinic: bool = False
    has_play_school: bool = False
    has_super_market: bool = False
    has_pharmacy: bool = False
    has_clubhouse: bool = False
    sunlight_percentage: int = 0
    has_water_meter: bool = False
    has_gas_pipeline: bool = False


@dataclass
class Area:
    super_built_up: int = 0
    carpet: int = 0


@dataclass
class Charges:
    maintenance_per_month: int = 0
    security_deposit: int = 0
    brokerage: int = 0
    move_in_charges: int = 0


@dataclass
class Property:
    """A property listing, surfaced as a reel when it has a video."""

    id: str
    title: str
    description: str
    lister: Lister
    price: Price
    location: str
    configuration: Configuration
    property_type: PropertyType
    posted_on: datetime
    status: PropertyStatus = PropertyStatus.PENDING_REVIEW
    image: str = PLACEHOLDER_PROPERTY_IMAGE
    video: Optional[str] = None
    society_name: Optional[str] = None
    video_views: int = 0
    shortlist_count: int = 0
    floor_no: int = 0
    total_floors: int = 0
    kitchen_utility: bool = False
    main_door_direction: DoorDirection = DoorDirection.NORTH_EAST
    open_sides: str = "1"
    has_balcony: bool = False
    parking: Parking = field(default_factory=Parking)
    features: Features = field(default_factory=Features)
    amenities: Amenities = field(default_factory=Amenities)
    area: Area = field(default_factory=Area)
    charges: Charges = field(default_factory=Charges)


# --- User profiles ---


@dataclass
class SearchHistoryItem:
    display: str
    # Raw filter object as submitted, camelCase keys.
    filters: dict


@dataclass
class UserProfile:
    """
    A user profile. `type` discriminates seekers from the lister variants;
    variant-only fields stay None for the other types.
    """

    id: str
    name: str
    email: str
    type: ProfileType
    phone: str = ""
    avatar: Optional[str] = None
    role: Optional[UserRole] = None
    bio: Optional[str] = None
    # Seeker
    search_criteria: Optional[str] = None
    search_history: List[SearchHistoryItem] = field(default_factory=list)
    # Dealer / developer
    company_name: Optional[str] = None
    rera_id: Optional[str] = None

    @property
    def is_seeker(self) -> bool:
        return self.type == ProfileType.SEEKER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_service_provider(self) -> bool:
        return self.role == UserRole.SERVICE_PROVIDER


# --- Chat ---


@dataclass
class Participant:
    name: str
    avatar: str


@dataclass
class LastMessage:
    text: str
    sender_id: str
    timestamp: Optional[datetime] = None


@dataclass
class ChatMessage:
    id: str
    sender_id: str
    text: str
    timestamp: Optional[datetime] = None


@dataclass
class ChatConversation:
    id: str
    participant_ids: List[str]
    participants: Dict[str, Participant]
    last_message: LastMessage
    unread_count: int = 0
    messages: List[ChatMessage] = field(default_factory=list)

    def other_participant(self, user_id: str) -> Optional[str]:
        for participant_id in self.participant_ids:
            if participant_id != user_id:
                return participant_id
        return None


# --- Ironing ---


@dataclass
class IroningAddress:
    apartment_name: str
    block: str
    floor_no: str
    flat_no: str


@dataclass
class IroningProfile:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[IroningAddress] = None


@dataclass
class IroningPriceItem:
    name: str
    price: float
    category: str


@dataclass
class IroningOrderItem:
    name: str
    price: float
    quantity: int


@dataclass
class StatusUpdate:
    status: IroningOrderStatus
    timestamp: datetime
    updated_by: str


@dataclass
class IroningOrder:
    id: str
    order_id: int
    user_id: str
    user_email: str
    items: List[IroningOrderItem]
    total_cost: float
    total_items: int
    status: IroningOrderStatus
    placed_at: datetime
    address: IroningAddress
    user_name: Optional[str] = None
    user_phone: Optional[str] = None
    status_history: List[StatusUpdate] = field(default_factory=list)
    estimated_delivery: Optional[datetime] = None
