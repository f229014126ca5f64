"""
Property listings: create/edit/delete, the reels feed, shortlists and the
admin review queue.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Tuple

from lokality.auth import Identity
from lokality.db import DbClient
from lokality.exceptions import NotFoundError, PermissionDeniedError
from lokality.schemas import PropertyForm
from lokality.storage import StorageClient, Upload
from lokality.users import default_name, require_admin
from shared.constants import PLACEHOLDER_AVATAR, PLACEHOLDER_PROPERTY_IMAGE
from shared.types import (
    Amenities,
    Area,
    Charges,
    Features,
    Lister,
    ListerType,
    Parking,
    Price,
    ProfileType,
    Property,
    PropertyStatus,
    UserProfile,
)
from shared.utils import utc_now

logger = logging.getLogger(__name__)


def property_title(form: PropertyForm) -> str:
    return f"{form.configuration.upper()} in {form.society_name}"


def auto_description(form: PropertyForm) -> str:
    return (
        f"A {form.configuration} {form.property_type} in {form.society_name}, "
        f"available for {form.price_type}. Located at {form.location}."
    )


def _apply_form(property: Property, form: PropertyForm) -> None:
    """Copies the listing fields of the form onto `property`."""
    property.title = property_title(form)
    property.description = form.description or auto_description(form)
    property.price = Price(type=form.price_type, amount=form.price_amount)
    property.location = form.location
    property.society_name = form.society_name
    property.configuration = form.configuration
    property.property_type = form.property_type
    property.floor_no = form.floor_no
    property.total_floors = form.total_floors
    property.kitchen_utility = form.kitchen_utility
    property.main_door_direction = form.main_door_direction
    property.open_sides = form.open_sides
    property.has_balcony = form.has_balcony
    property.parking = Parking(
        has_2_wheeler=form.has_2_wheeler_parking,
        has_4_wheeler=form.has_4_wheeler_parking,
    )
    property.features = Features(
        sunlight_enters_home=form.sunlight_enters_home,
        houses_on_same_floor=form.houses_on_same_floor,
    )
    property.amenities = Amenities(
        has_lift=form.has_lift,
        has_children_play_area=form.has_children_play_area,
        has_doctor_clinic=form.has_doctor_clinic,
        has_play_school=form.has_play_school,
        has_super_market=form.has_super_market,
        has_pharmacy=form.has_pharmacy,
        has_clubhouse=form.has_clubhouse,
        sunlight_percentage=form.sunlight_percentage,
        has_water_meter=form.has_water_meter,
        has_gas_pipeline=form.has_gas_pipeline,
    )
    property.area = Area(super_built_up=form.super_built_up_area, carpet=form.carpet_area)
    property.charges = Charges(
        maintenance_per_month=form.maintenance_per_month,
        security_deposit=form.security_deposit,
        brokerage=form.brokerage or 0,
        move_in_charges=form.move_in_charges,
    )


def _upload_video(storage: StorageClient, user_id: str, video: Upload) -> str:
    millis = int(time.time() * 1000)
    path = f"videos/{user_id}/{millis}_{video.filename}"
    url = storage.upload_bytes(path, video.data, video.content_type)
    logger.info("Uploaded video for %s to %s", user_id, path)
    return url


def _ensure_lister_profile(
    db: DbClient, identity: Identity, lister_type: Optional[ListerType]
) -> UserProfile:
    """
    Loads the lister's profile. A seeker posting their first listing becomes
    a lister of the chosen type; users without a profile get one.
    """
    profile = db.get_user(identity.uid)
    if profile is None:
        profile = UserProfile(
            id=identity.uid,
            name=default_name(identity),
            email=identity.email or "",
            type=ProfileType(lister_type or ListerType.OWNER),
            phone=identity.phone_number or "",
            avatar=identity.photo_url or PLACEHOLDER_AVATAR,
        )
        db.save_user(profile)
        logger.info("Created %s profile for %s", profile.type, identity.uid)
    elif profile.is_seeker:
        profile.type = ProfileType(lister_type or ListerType.OWNER)
        db.save_user(profile)
        logger.info("Upgraded seeker %s to %s", identity.uid, profile.type)
    return profile


def _delete_video(storage: StorageClient, property: Property) -> None:
    """Best-effort: a listing is removed even when its video cannot be."""
    if not property.video:
        return
    try:
        storage.delete(storage.path_from_url(property.video))
    except FileNotFoundError:
        logger.info("Video for %s was already deleted", property.id)
    except Exception:
        logger.exception("Failed to delete video for %s", property.id)


def get_property(db: DbClient, property_id: str) -> Property:
    property = db.get_property(property_id)
    if property is None:
        raise NotFoundError("Property not found.")
    return property


def view_property(
    db: DbClient, property_id: str, viewer_id: Optional[str] = None
) -> Property:
    """
    A listing as seen by `viewer_id`. Listings that are not available are only
    visible to their lister and to admins; everyone else gets a not-found.
    """
    property = get_property(db, property_id)
    if property.status == PropertyStatus.AVAILABLE:
        return property
    if viewer_id is not None:
        if property.lister.id == viewer_id:
            return property
        viewer = db.get_user(viewer_id)
        if viewer is not None and viewer.is_admin:
            return property
    raise NotFoundError("Property not found.")


def create_property(
    db: DbClient,
    storage: StorageClient,
    identity: Identity,
    form: PropertyForm,
    video: Optional[Upload] = None,
) -> Property:
    profile = _ensure_lister_profile(db, identity, form.user_type)
    video_url = form.video_url
    if video is not None:
        video_url = _upload_video(storage, identity.uid, video)

    property = Property(
        id="",
        title="",
        description="",
        lister=Lister(
            id=identity.uid,
            name=profile.name,
            type=ListerType(profile.type),
            avatar=profile.avatar,
            phone=profile.phone,
        ),
        price=Price(type=form.price_type, amount=form.price_amount),
        location=form.location,
        configuration=form.configuration,
        property_type=form.property_type,
        posted_on=utc_now(),
        status=PropertyStatus.PENDING_REVIEW,
        image=PLACEHOLDER_PROPERTY_IMAGE,
        video=video_url,
    )
    _apply_form(property, form)
    created = db.create_property(property)
    logger.info("Listed property %s by %s", created.id, identity.uid)
    return created


def _require_lister(property: Property, user_id: str) -> None:
    if property.lister.id != user_id:
        raise PermissionDeniedError("Only the lister can change this property.")


def update_property(
    db: DbClient,
    storage: StorageClient,
    user_id: str,
    property_id: str,
    form: PropertyForm,
    video: Optional[Upload] = None,
) -> Property:
    property = get_property(db, property_id)
    _require_lister(property, user_id)
    _apply_form(property, form)
    if video is not None:
        property.video = _upload_video(storage, user_id, video)
    elif form.video_url:
        property.video = form.video_url
    db.save_property(property)
    return property


def delete_property(
    db: DbClient, storage: StorageClient, user_id: str, property_id: str
) -> None:
    property = get_property(db, property_id)
    if property.lister.id != user_id:
        requester = db.get_user(user_id)
        if requester is None or not requester.is_admin:
            raise PermissionDeniedError("Only the lister can delete this property.")
    _delete_video(storage, property)
    db.delete_property(property_id)
    logger.info("Deleted property %s", property_id)


def mark_occupied(db: DbClient, user_id: str, property_id: str) -> Property:
    property = get_property(db, property_id)
    _require_lister(property, user_id)
    property.status = PropertyStatus.OCCUPIED
    db.save_property(property)
    return property


def reels_feed(db: DbClient) -> List[Property]:
    return db.list_properties(PropertyStatus.AVAILABLE)


def listings_by(db: DbClient, lister_id: str) -> List[Property]:
    """All of a lister's properties regardless of status, newest first."""
    return [p for p in db.list_properties() if p.lister.id == lister_id]


def get_shortlisted(db: DbClient, property_ids: List[str]) -> List[Property]:
    return db.get_properties(property_ids)


def toggle_shortlist(
    property_ids: List[str], property_id: str
) -> Tuple[List[str], bool]:
    """Returns the updated shortlist and whether the property was added."""
    if property_id in property_ids:
        return [pid for pid in property_ids if pid != property_id], False
    return [*property_ids, property_id], True


# Admin review


def list_pending(db: DbClient, admin_id: str) -> List[Property]:
    require_admin(db, admin_id)
    return db.list_properties(PropertyStatus.PENDING_REVIEW)


def approve(db: DbClient, admin_id: str, property_id: str) -> Property:
    require_admin(db, admin_id)
    property = get_property(db, property_id)
    property.status = PropertyStatus.AVAILABLE
    db.save_property(property)
    logger.info("Approved property %s", property_id)
    return property


def reject(
    db: DbClient, storage: StorageClient, admin_id: str, property_id: str
) -> None:
    require_admin(db, admin_id)
    property = get_property(db, property_id)
    _delete_video(storage, property)
    db.delete_property(property_id)
    logger.info("Rejected property %s", property_id)
