"""
Seeds demo listings into the configured database.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lokality.dependencies import get_db_client
from shared.json_utils import from_document
from shared.types import Property, PropertyStatus
from shared.utils import utc_now

logger = logging.getLogger(__name__)

VIDEO_BASE = "https://videos.pexels.com/video-files"

DEMO_PROPERTIES = [
    {
        "id": "demo-1",
        "title": "Spacious 3BHK in HSR Layout",
        "description": "A beautiful and spacious 3BHK apartment located in the heart of HSR Layout. Comes with modern amenities and a great view. Perfect for families.",
        "video": f"{VIDEO_BASE}/8294975/8294975-hd.mp4",
        "lister": {"id": "lister-1", "name": "Priya Sharma", "type": "owner", "phone": "+919876543210"},
        "price": {"type": "rent", "amount": 65000},
        "location": "HSR Layout, Bengaluru",
        "societyName": "Prestige Ferns Residency",
        "configuration": "3bhk",
        "propertyType": "apartment",
        "floorNo": 12,
        "totalFloors": 20,
        "mainDoorDirection": "north-east",
        "openSides": "2",
        "kitchenUtility": True,
        "hasBalcony": True,
        "parking": {"has2Wheeler": True, "has4Wheeler": True},
        "features": {"sunlightEntersHome": True, "housesOnSameFloor": 3},
        "amenities": {
            "hasLift": True,
            "hasChildrenPlayArea": True,
            "hasPlaySchool": True,
            "hasSuperMarket": True,
            "hasClubhouse": True,
            "sunlightPercentage": 80,
            "hasWaterMeter": True,
            "hasGasPipeline": True,
        },
        "area": {"superBuiltUp": 1800, "carpet": 1500},
        "charges": {"maintenancePerMonth": 5000, "securityDeposit": 200000, "moveInCharges": 10000},
    },
    {
        "id": "demo-2",
        "title": "Luxury Villa in Whitefield",
        "description": "Experience luxury living in this stunning villa in Whitefield. Private garden, swimming pool, and state-of-the-art interiors.",
        "video": f"{VIDEO_BASE}/5361368/5361368-hd.mp4",
        "lister": {"id": "lister-2", "name": "Rajesh Kumar", "type": "developer", "phone": "+919876543211"},
        "price": {"type": "sale", "amount": 35000000},
        "location": "Whitefield, Bengaluru",
        "societyName": "Palm Meadows",
        "configuration": "4bhk",
        "propertyType": "villa",
        "floorNo": 0,
        "totalFloors": 1,
        "mainDoorDirection": "north-west",
        "openSides": "4",
        "kitchenUtility": True,
        "hasBalcony": True,
        "parking": {"has2Wheeler": True, "has4Wheeler": True},
        "features": {"sunlightEntersHome": True, "housesOnSameFloor": 1},
        "amenities": {"hasClubhouse": True, "sunlightPercentage": 90, "hasGasPipeline": True},
        "area": {"superBuiltUp": 4000, "carpet": 3200},
        "charges": {"maintenancePerMonth": 15000, "brokerage": 350000, "moveInCharges": 25000},
    },
    {
        "id": "demo-3",
        "title": "Cozy 2BHK in Koramangala",
        "description": "A cozy 2BHK close to cafes, parks and the metro.",
        "lister": {"id": "lister-3", "name": "Anita Desai", "type": "dealer", "phone": "+919876543212"},
        "price": {"type": "rent", "amount": 45000},
        "location": "Koramangala, Bengaluru",
        "societyName": "Raheja Residency",
        "configuration": "2bhk",
        "propertyType": "apartment",
        "floorNo": 5,
        "totalFloors": 10,
        "mainDoorDirection": "south-west",
        "openSides": "1",
        "hasBalcony": True,
        "parking": {"has2Wheeler": True},
        "features": {"housesOnSameFloor": 4},
        "amenities": {"hasLift": True, "hasSuperMarket": True, "hasPharmacy": True, "sunlightPercentage": 40},
        "area": {"superBuiltUp": 1200, "carpet": 950},
        "charges": {"maintenancePerMonth": 3000, "securityDeposit": 150000, "brokerage": 45000, "moveInCharges": 5000},
    },
    {
        "id": "demo-4",
        "title": "Modern Studio Apartment",
        "description": "A compact, well-lit studio on a quiet street in Indiranagar.",
        "lister": {"id": "lister-4", "name": "Vikram Singh", "type": "owner", "phone": "+919876543213"},
        "price": {"type": "rent", "amount": 25000},
        "location": "Indiranagar, Bengaluru",
        "societyName": "Indiranagar Homes",
        "configuration": "studio",
        "propertyType": "builder floor",
        "floorNo": 3,
        "totalFloors": 4,
        "mainDoorDirection": "south-east",
        "openSides": "2",
        "kitchenUtility": True,
        "parking": {"has2Wheeler": True},
        "features": {"sunlightEntersHome": True, "housesOnSameFloor": 2},
        "amenities": {"sunlightPercentage": 60, "hasWaterMeter": True},
        "area": {"superBuiltUp": 600, "carpet": 500},
        "charges": {"maintenancePerMonth": 1000, "securityDeposit": 75000, "moveInCharges": 2000},
    },
    {
        "id": "demo-5",
        "title": "Penthouse with a Rooftop Terrace",
        "description": "Top-floor penthouse with a private rooftop terrace and skyline views.",
        "lister": {"id": "lister-5", "name": "Prestige Group", "type": "developer", "phone": "+919876543214"},
        "price": {"type": "sale", "amount": 50000000},
        "location": "Koramangala, Bengaluru",
        "societyName": "Prestige Pinnacle",
        "configuration": "5bhk+",
        "propertyType": "penthouse",
        "floorNo": 25,
        "totalFloors": 25,
        "mainDoorDirection": "north-east",
        "openSides": "3",
        "kitchenUtility": True,
        "hasBalcony": True,
        "parking": {"has2Wheeler": True, "has4Wheeler": True},
        "features": {"sunlightEntersHome": True, "housesOnSameFloor": 1},
        "amenities": {"hasLift": True, "hasClubhouse": True, "sunlightPercentage": 100, "hasGasPipeline": True},
        "area": {"superBuiltUp": 5000, "carpet": 4000},
        "charges": {"maintenancePerMonth": 20000, "brokerage": 500000, "moveInCharges": 50000},
    },
]


def demo_properties() -> list[Property]:
    """Demo listings, available, posted one day apart starting today."""
    now = utc_now()
    listings = []
    for days_ago, data in enumerate(DEMO_PROPERTIES):
        doc = {key: value for key, value in data.items() if key != "id"}
        doc["postedOn"] = now - timedelta(days=days_ago)
        doc["status"] = PropertyStatus.AVAILABLE.value
        listings.append(from_document(Property, data["id"], doc))
    return listings


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed demo property listings")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite listings that already exist",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    db = get_db_client()
    created = 0
    for property in demo_properties():
        if db.get_property(property.id) and not args.force:
            logger.info("Skipping existing listing %s", property.id)
            continue
        db.save_property(property)
        created += 1
    logger.info("Seeded %d listings", created)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
