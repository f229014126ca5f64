"""
Pydantic schemas for the Lokality API.

Request and response bodies use camelCase keys, matching the documents the
web client already reads; snake_case names are accepted on input as well.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from lokality.search import DateSort, PriceSort, SearchFilters
from shared.constants import (
    MAX_CHAT_MESSAGE_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_SEARCH_CRITERIA_LENGTH,
)
from shared.json_utils import snake_to_camel, to_document
from shared.types import (
    Configuration,
    DoorDirection,
    IroningOrderStatus,
    ListerType,
    PresenceStatus,
    PriceType,
    PropertyType,
    UserRole,
)


def document(record) -> dict:
    """JSON-ready camelCase document for a `shared.types` record, id included."""
    data = to_document(record, serialize_dates=True)
    if hasattr(record, "id"):
        data["id"] = record.id
    return data


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=snake_to_camel, populate_by_name=True)


# --- Properties ---


class PropertyForm(CamelModel):
    """Fields of the add/edit property form."""

    price_type: PriceType
    price_amount: int = Field(..., ge=1)
    location: str = Field(..., min_length=3)
    society_name: str = Field(..., min_length=2)
    user_type: Optional[ListerType] = None
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    video_url: Optional[str] = None

    property_type: PropertyType = PropertyType.APARTMENT
    configuration: Configuration = Configuration.TWO_BHK
    floor_no: int = 0
    total_floors: int = Field(default=0, ge=0)
    main_door_direction: DoorDirection = DoorDirection.NORTH_EAST
    open_sides: Literal["1", "2", "3", "4"] = "1"
    houses_on_same_floor: int = Field(default=1, ge=1)

    kitchen_utility: bool = False
    has_balcony: bool = False
    sunlight_enters_home: bool = False
    sunlight_percentage: int = Field(default=50, ge=0, le=100)
    has_2_wheeler_parking: bool = False
    has_4_wheeler_parking: bool = False
    super_built_up_area: int = Field(..., ge=1)
    carpet_area: int = Field(..., ge=1)

    has_lift: bool = False
    has_children_play_area: bool = False
    has_doctor_clinic: bool = False
    has_play_school: bool = False
    has_super_market: bool = False
    has_pharmacy: bool = False
    has_clubhouse: bool = False
    has_water_meter: bool = False
    has_gas_pipeline: bool = False

    maintenance_per_month: int = Field(default=0, ge=0)
    security_deposit: int = Field(default=0, ge=0)
    move_in_charges: int = Field(default=0, ge=0)
    brokerage: Optional[int] = Field(default=0, ge=0)


class PropertyListResponse(CamelModel):
    properties: List[dict]


class ShortlistRequest(CamelModel):
    property_ids: List[str] = Field(default_factory=list)


# --- Search ---


class SearchRequest(CamelModel):
    filters: SearchFilters = Field(default_factory=SearchFilters)
    price_sort: PriceSort = "none"
    date_sort: DateSort = "desc"


class SearchResponse(CamelModel):
    properties: List[dict]
    filters: dict
    description: str
    max_price: int
    price_step: int
    search_history: Optional[List[dict]] = None


class SearchHistoryResponse(CamelModel):
    search_history: List[dict]


# --- Chats ---


class StartChatRequest(CamelModel):
    target_id: str = Field(..., min_length=1)
    target_name: str = Field(..., min_length=1)
    target_avatar: Optional[str] = None


class SendMessageRequest(CamelModel):
    text: str = Field(..., max_length=MAX_CHAT_MESSAGE_LENGTH)


class ChatListResponse(CamelModel):
    chats: List[dict]


class PresenceUpdateRequest(CamelModel):
    status: PresenceStatus


class PresenceResponse(CamelModel):
    user_id: str
    status: PresenceStatus


# --- Users ---


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, max_length=200)
    phone: Optional[str] = Field(default=None, max_length=32)
    bio: Optional[str] = Field(default=None, max_length=1000)
    search_criteria: Optional[str] = Field(
        default=None, max_length=MAX_SEARCH_CRITERIA_LENGTH
    )
    company_name: Optional[str] = None
    rera_id: Optional[str] = None


class SetRoleRequest(CamelModel):
    role: Optional[UserRole] = None


# --- AI ---


class DescriptionRequest(CamelModel):
    price_type: Optional[PriceType] = None
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
    amenities: List[str] = Field(default_factory=list)


class DescriptionResponse(CamelModel):
    description: str
    generated: bool


class MatchScoreRequest(CamelModel):
    property_details: str = Field(..., min_length=1)
    search_criteria: str = Field(..., min_length=1)


class MatchScoreResponse(CamelModel):
    match_score: int
    matches: List[str]
    mismatches: List[str]


# --- Ironing ---


class PriceItemModel(CamelModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1)


class PriceListRequest(CamelModel):
    items: List[PriceItemModel]


class PriceListResponse(CamelModel):
    items: List[dict]


class OrderItemModel(CamelModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=0)


class AddressModel(CamelModel):
    apartment_name: str = ""
    block: str = ""
    floor_no: str = ""
    flat_no: str = ""


class PlaceOrderRequest(CamelModel):
    items: List[OrderItemModel]
    address: AddressModel


class OrderListResponse(CamelModel):
    orders: List[dict]


class AdvanceOrderRequest(CamelModel):
    status: IroningOrderStatus


class EstimatedDeliveryRequest(CamelModel):
    estimated_delivery: datetime


class ItemPriceRequest(CamelModel):
    price: float = Field(..., ge=0)


# --- Misc ---


class SignUrlResponse(BaseModel):
    url: str
    path: str


class HealthResponse(BaseModel):
    status: Literal["ok"]
