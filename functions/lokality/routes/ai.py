"""
AI routes: listing description drafts and property match scores.

Both degrade instead of failing: descriptions fall back to a template and
match scores come back as null when the model is unavailable.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from flows.match_score import (
    PropertyMatchScoreInput,
    build_property_details,
    get_property_match_score,
)
from flows.property_description import (
    PropertyDescriptionInput,
    fallback_description,
    generate_property_description_action,
)
from lokality import properties
from lokality.auth import Identity, get_optional_identity
from lokality.db import DbClient
from lokality.dependencies import get_db_client
from lokality.schemas import (
    DescriptionRequest,
    DescriptionResponse,
    MatchScoreRequest,
    MatchScoreResponse,
)
from shared.constants import DEFAULT_MATCH_CRITERIA

router = APIRouter(prefix="/ai")


def _match_response(input: PropertyMatchScoreInput) -> Optional[MatchScoreResponse]:
    result = get_property_match_score(input)
    if result is None:
        return None
    return MatchScoreResponse(
        match_score=result.match_score,
        matches=result.matches,
        mismatches=result.mismatches,
    )


@router.post("/description", response_model=DescriptionResponse)
def generate_description(payload: DescriptionRequest):
    input = PropertyDescriptionInput(**payload.model_dump())
    result = generate_property_description_action(input)
    if result is None:
        return DescriptionResponse(
            description=fallback_description(input), generated=False
        )
    return DescriptionResponse(
        description=result.description, generated=result.generated
    )


@router.post("/match-score", response_model=Optional[MatchScoreResponse])
def match_score(payload: MatchScoreRequest):
    return _match_response(
        PropertyMatchScoreInput(
            property_details=payload.property_details,
            search_criteria=payload.search_criteria,
        )
    )


@router.get("/match-score/{property_id}", response_model=Optional[MatchScoreResponse])
def match_score_for_property(
    property_id: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
    db: DbClient = Depends(get_db_client),
):
    """Scores a listing against the viewer's saved search criteria."""
    viewer_id = identity.uid if identity is not None else None
    property = properties.view_property(db, property_id, viewer_id)
    criteria = DEFAULT_MATCH_CRITERIA
    if identity is not None:
        profile = db.get_user(identity.uid)
        if profile is not None and profile.is_seeker and profile.search_criteria:
            criteria = profile.search_criteria
    return _match_response(
        PropertyMatchScoreInput(
            property_details=build_property_details(property),
            search_criteria=criteria,
        )
    )
