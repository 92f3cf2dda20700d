"""
Body fat endpoints.

Navy-method estimate, full body composition report, ideal body fat by age
and category lookups across ACE, NIH and ACSM standards.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from fitcalc.db.database import get_db
from fitcalc.domain.measurements import (
    BodyCompositionReport,
    CategoryMatch,
    CategoryStandard,
    Gender,
    UnitSystem,
)
from fitcalc.services import body_composition_service as composition
from fitcalc.services.body_fat_calculator import BodyFatCalculator
from fitcalc.services.category_service import age_band_for, lookup_categories
from fitcalc.services.preference_service import PreferenceService, StorageKey

logger = logging.getLogger(__name__)

router = APIRouter()


class BodyFatRequest(BaseModel):
    """Request model for a Navy-method estimate."""

    gender: Gender
    height: float = Field(..., gt=0, description="Height in cm or inches")
    waist: float = Field(..., gt=0, description="Waist circumference at the navel")
    neck: float = Field(..., gt=0, description="Neck circumference")
    hip: Optional[float] = Field(
        None, gt=0, description="Hip circumference (required for women)"
    )
    unit_system: Optional[str] = Field(
        None, description="metric/cm or imperial/inches (defaults to the stored preference)"
    )


class BodyFatResponse(BaseModel):
    body_fat_percentage: float
    category: str
    unit_system: str


class BodyCompositionRequest(BaseModel):
    """
    Request model for a composition report.

    Either pass body_fat_percentage directly, or the Navy measurements
    (height, waist, neck, and hip for women) to estimate it.
    """

    gender: Gender
    weight: float = Field(..., gt=0)
    age: float = Field(..., gt=0, le=120)
    body_fat_percentage: Optional[float] = Field(None, ge=0, lt=100)
    height: Optional[float] = Field(None, gt=0)
    waist: Optional[float] = Field(None, gt=0)
    neck: Optional[float] = Field(None, gt=0)
    hip: Optional[float] = Field(None, gt=0)
    unit_system: Optional[str] = None


class IdealBodyFatResponse(BaseModel):
    age: float
    gender: Gender
    ideal_body_fat_percentage: float


class CategoryLookupResponse(BaseModel):
    standard: CategoryStandard
    age_band: Optional[str]
    current: Optional[str]
    categories: List[CategoryMatch]


@router.post("/body-fat", response_model=BodyFatResponse, status_code=status.HTTP_200_OK)
async def calculate_body_fat(request: BodyFatRequest, db: Session = Depends(get_db)):
    """
    Estimate body fat percentage with the U.S. Navy method.

    Stores the measurements and result so the form can be restored later.
    """
    preferences = PreferenceService(db)

    try:
        unit_system = preferences.resolve_unit_system(request.unit_system)
        bfp = BodyFatCalculator.calculate_navy_body_fat(
            gender=request.gender,
            height=request.height,
            waist=request.waist,
            neck=request.neck,
            hip=request.hip,
            unit_system=unit_system,
        )
    except ValueError as e:
        logger.warning(f"[BODY_FAT] Rejected measurements: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    preferences.save_many(
        {
            StorageKey.UNIT_PREFERENCE: unit_system.value,
            StorageKey.GENDER: request.gender.value,
            StorageKey.HEIGHT: request.height,
            StorageKey.WAIST: request.waist,
            StorageKey.NECK: request.neck,
            StorageKey.HIP: request.hip,
            StorageKey.BODY_FAT_RESULT: bfp,
        }
    )
    logger.info(f"[BODY_FAT] {request.gender.value} estimate {bfp}% ({unit_system.value})")

    return BodyFatResponse(
        body_fat_percentage=bfp,
        category=BodyFatCalculator.body_fat_category(bfp, request.gender),
        unit_system=unit_system.value,
    )


@router.post(
    "/body-composition",
    response_model=BodyCompositionReport,
    status_code=status.HTTP_200_OK,
)
async def analyze_body_composition(
    request: BodyCompositionRequest, db: Session = Depends(get_db)
):
    """
    Full body composition report.

    Includes fat and lean mass, ideal body fat for the age, fat to lose,
    ideal weight, and (when height is known) the BMI-based cross-check
    and healthy weight range.
    """
    preferences = PreferenceService(db)

    try:
        unit_system = preferences.resolve_unit_system(request.unit_system)

        bfp = request.body_fat_percentage
        if bfp is None:
            if request.height is None or request.waist is None or request.neck is None:
                raise ValueError(
                    "Provide body_fat_percentage or height, waist and neck measurements"
                )
            bfp = BodyFatCalculator.calculate_navy_body_fat(
                gender=request.gender,
                height=request.height,
                waist=request.waist,
                neck=request.neck,
                hip=request.hip,
                unit_system=unit_system,
            )

        report = composition.analyze_body_composition(
            gender=request.gender,
            weight=request.weight,
            body_fat_percentage=bfp,
            age=request.age,
            unit_system=unit_system,
            height=request.height,
        )
    except ValueError as e:
        logger.warning(f"[BODY_FAT] Rejected composition request: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    preferences.set_unit_system(unit_system)
    return report


@router.get(
    "/body-fat/ideal",
    response_model=IdealBodyFatResponse,
    status_code=status.HTTP_200_OK,
)
async def get_ideal_body_fat(
    age: float = Query(..., ge=0, le=120, description="Age in years"),
    gender: Gender = Query(..., description="male or female"),
):
    """Ideal body fat percentage for an age (Jackson & Pollock)."""
    return IdealBodyFatResponse(
        age=age,
        gender=gender,
        ideal_body_fat_percentage=composition.ideal_body_fat(age, gender),
    )


@router.get(
    "/body-fat/categories",
    response_model=CategoryLookupResponse,
    status_code=status.HTTP_200_OK,
)
async def get_body_fat_categories(
    value: float = Query(..., description="Body fat percentage to classify"),
    gender: Gender = Query(...),
    standard: str = Query("ace", description="ace, nih or acsm"),
    age_band: Optional[str] = Query(None, description="e.g. 20-39 (NIH) or 60+ (ACSM)"),
    age: Optional[float] = Query(None, gt=0, description="Used to pick the age band"),
    weight: Optional[float] = Query(
        None, gt=0, description="Current weight, to estimate weight at band boundaries"
    ),
    unit_system: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Categories of a body fat standard, flagging the one containing value.

    An age band missing from the standard's table returns an empty list.
    """
    preferences = PreferenceService(db)
    try:
        if age_band is None and age is not None:
            age_band = age_band_for(age, standard)

        if weight is not None:
            resolved_unit = preferences.resolve_unit_system(unit_system)
        else:
            resolved_unit = UnitSystem.METRIC

        categories = lookup_categories(
            value=value,
            gender=gender,
            standard=standard,
            age_band=age_band,
            weight=weight,
            unit_system=resolved_unit,
        )
        resolved_standard = CategoryStandard.parse(standard)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    if weight is not None:
        preferences.set_unit_system(resolved_unit)

    current = next((c.label for c in categories if c.is_current), None)
    return CategoryLookupResponse(
        standard=resolved_standard,
        age_band=age_band,
        current=current,
        categories=categories,
    )
