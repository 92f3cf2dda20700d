"""
General calculator endpoints.

BMI, BMR, one-rep max, heart rate, body frame, body ratios and unit conversion.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from fitcalc.db.database import get_db
from fitcalc.domain.measurements import (
    ActivityLevel,
    BodyFrame,
    Gender,
    HeartRateFormula,
    HeartRateZone,
    OneRepMaxFormula,
    TrainingLoad,
)
from fitcalc.services.formula_calculator import FormulaCalculator
from fitcalc.services.preference_service import PreferenceService, StorageKey
from fitcalc.services.unit_conversion import convert_measurement, height_unit, weight_unit

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(e: ValueError) -> HTTPException:
    logger.warning(f"[CALCULATORS] Rejected input: {e}")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# BMI


class BmiRequest(BaseModel):
    weight: float = Field(..., gt=0, description="Weight in kg or lbs")
    height: float = Field(..., gt=0, description="Height in cm or inches")
    unit_system: Optional[str] = Field(
        None, description="metric or imperial (defaults to the stored preference)"
    )


class BmiResponse(BaseModel):
    bmi: float
    category: str
    healthy_weight_min: int
    healthy_weight_max: int
    weight_unit: str
    unit_system: str


@router.post("/calculators/bmi", response_model=BmiResponse, status_code=status.HTTP_200_OK)
async def calculate_bmi(request: BmiRequest, db: Session = Depends(get_db)):
    """
    Calculate Body Mass Index with its category and the healthy weight
    range (BMI 18.5-24.9) for the given height.
    """
    preferences = PreferenceService(db)
    try:
        unit_system = preferences.resolve_unit_system(request.unit_system)
        bmi = FormulaCalculator.calculate_bmi(request.weight, request.height, unit_system)
        response = BmiResponse(
            bmi=bmi,
            category=FormulaCalculator.bmi_category(bmi),
            healthy_weight_min=FormulaCalculator.weight_for_bmi(request.height, 18.5, unit_system),
            healthy_weight_max=FormulaCalculator.weight_for_bmi(request.height, 24.9, unit_system),
            weight_unit=unit_system.weight_unit,
            unit_system=unit_system.value,
        )
    except ValueError as e:
        raise _bad_request(e)

    preferences.save_many(
        {
            StorageKey.UNIT_PREFERENCE: unit_system.value,
            StorageKey.HEIGHT: request.height,
            StorageKey.WEIGHT: request.weight,
            StorageKey.BMI_RESULT: bmi,
        }
    )
    return response


# BMR


class BmrRequest(BaseModel):
    weight: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    age: int = Field(..., gt=0, le=120)
    gender: Gender
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    unit_system: Optional[str] = None


class BmrResponse(BaseModel):
    bmr: int
    tdee: int
    activity_level: ActivityLevel


@router.post("/calculators/bmr", response_model=BmrResponse, status_code=status.HTTP_200_OK)
async def calculate_bmr(request: BmrRequest, db: Session = Depends(get_db)):
    """
    Calculate Basal Metabolic Rate (Mifflin-St Jeor) and total daily energy
    expenditure for an activity level.
    """
    preferences = PreferenceService(db)
    try:
        unit_system = preferences.resolve_unit_system(request.unit_system)
        bmr = FormulaCalculator.calculate_bmr(
            weight=request.weight,
            height=request.height,
            age=request.age,
            gender=request.gender,
            unit_system=unit_system,
        )
        tdee = FormulaCalculator.calculate_tdee(bmr, request.activity_level)
    except ValueError as e:
        raise _bad_request(e)

    preferences.save_many(
        {
            StorageKey.UNIT_PREFERENCE: unit_system.value,
            StorageKey.HEIGHT: request.height,
            StorageKey.WEIGHT: request.weight,
            StorageKey.AGE: request.age,
            StorageKey.GENDER: request.gender.value,
            StorageKey.ACTIVITY_LEVEL: request.activity_level.value,
            StorageKey.BMR_RESULT: bmr,
        }
    )
    return BmrResponse(bmr=bmr, tdee=tdee, activity_level=request.activity_level)


# One-rep max


class OneRepMaxRequest(BaseModel):
    weight: float = Field(..., gt=0, description="Weight lifted")
    reps: int = Field(..., ge=1, le=36, description="Repetitions performed")
    formula: OneRepMaxFormula = OneRepMaxFormula.BRZYCKI


class OneRepMaxResponse(BaseModel):
    one_rep_max: float
    formula: OneRepMaxFormula
    training_loads: List[TrainingLoad]


@router.post(
    "/calculators/one-rep-max",
    response_model=OneRepMaxResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_one_rep_max(request: OneRepMaxRequest, db: Session = Depends(get_db)):
    """Estimate one-rep max and working weights for common rep ranges."""
    try:
        orm = FormulaCalculator.calculate_one_rep_max(
            request.weight, request.reps, request.formula
        )
    except ValueError as e:
        raise _bad_request(e)

    PreferenceService(db).save_many(
        {
            StorageKey.LIFTING_WEIGHT: request.weight,
            StorageKey.REPS: request.reps,
            StorageKey.FORMULA: request.formula.value,
            StorageKey.ONE_REP_MAX_RESULT: orm,
        }
    )
    return OneRepMaxResponse(
        one_rep_max=orm,
        formula=request.formula,
        training_loads=FormulaCalculator.training_loads(orm),
    )


# Heart rate


class MaxHeartRateRequest(BaseModel):
    age: int = Field(..., gt=0, le=120)
    formula: HeartRateFormula = HeartRateFormula.TRADITIONAL


class MaxHeartRateResponse(BaseModel):
    max_heart_rate: int
    formula: HeartRateFormula
    zones: List[HeartRateZone]


@router.post(
    "/calculators/max-heart-rate",
    response_model=MaxHeartRateResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_max_heart_rate(request: MaxHeartRateRequest):
    """Estimate maximum heart rate and the five training zones."""
    try:
        mhr = FormulaCalculator.calculate_max_heart_rate(request.age, request.formula)
    except ValueError as e:
        raise _bad_request(e)

    return MaxHeartRateResponse(
        max_heart_rate=mhr,
        formula=request.formula,
        zones=FormulaCalculator.heart_rate_zones(mhr),
    )


# Body frame and ratios


class BodyFrameRequest(BaseModel):
    height: float = Field(..., gt=0)
    wrist: float = Field(..., gt=0, description="Wrist circumference")
    gender: Gender
    unit_system: Optional[str] = None


@router.post(
    "/calculators/body-frame",
    response_model=BodyFrame,
    status_code=status.HTTP_200_OK,
)
async def calculate_body_frame(request: BodyFrameRequest, db: Session = Depends(get_db)):
    """Body frame size from height and wrist circumference."""
    preferences = PreferenceService(db)
    try:
        unit_system = preferences.resolve_unit_system(request.unit_system)
        frame = FormulaCalculator.calculate_body_frame(
            request.height, request.wrist, request.gender, unit_system
        )
    except ValueError as e:
        raise _bad_request(e)

    preferences.set_unit_system(unit_system)
    return frame


class RatioResponse(BaseModel):
    ratio: float
    category: str


class ChestToWaistRequest(BaseModel):
    chest: float = Field(..., gt=0)
    waist: float = Field(..., gt=0)
    gender: Gender


@router.post(
    "/calculators/chest-to-waist",
    response_model=RatioResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_chest_to_waist(request: ChestToWaistRequest):
    try:
        ratio = FormulaCalculator.calculate_chest_to_waist_ratio(request.chest, request.waist)
    except ValueError as e:
        raise _bad_request(e)
    return RatioResponse(
        ratio=ratio,
        category=FormulaCalculator.chest_to_waist_category(ratio, request.gender),
    )


class WaistToHipRequest(BaseModel):
    waist: float = Field(..., gt=0)
    hip: float = Field(..., gt=0)
    gender: Gender


@router.post(
    "/calculators/waist-to-hip",
    response_model=RatioResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_waist_to_hip(request: WaistToHipRequest):
    try:
        ratio = FormulaCalculator.calculate_waist_to_hip_ratio(request.waist, request.hip)
    except ValueError as e:
        raise _bad_request(e)
    return RatioResponse(
        ratio=ratio,
        category=FormulaCalculator.waist_to_hip_category(ratio, request.gender),
    )


class WaistToHeightRequest(BaseModel):
    waist: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


@router.post(
    "/calculators/waist-to-height",
    response_model=RatioResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_waist_to_height(request: WaistToHeightRequest):
    try:
        ratio = FormulaCalculator.calculate_waist_to_height_ratio(request.waist, request.height)
    except ValueError as e:
        raise _bad_request(e)
    return RatioResponse(
        ratio=ratio,
        category=FormulaCalculator.waist_to_height_category(ratio),
    )


# Unit conversion


class ConversionRequest(BaseModel):
    value: float
    from_unit: str = Field(..., description="cm, inches, kg, lbs, metric or imperial")
    kind: str = Field("length", description="length or weight")


class ConversionResponse(BaseModel):
    value: float
    unit: str


@router.post(
    "/conversions",
    response_model=ConversionResponse,
    status_code=status.HTTP_200_OK,
)
async def convert(request: ConversionRequest):
    """Convert a value into the other unit system, rounded to 1 decimal."""
    try:
        converted = convert_measurement(request.value, request.from_unit, request.kind)
        # The result is in the opposite system to the source
        source = height_unit(request.from_unit) if request.kind == "length" else weight_unit(request.from_unit)
    except ValueError as e:
        raise _bad_request(e)

    target = {"cm": "inches", "inches": "cm", "kg": "lbs", "lbs": "kg"}[source]
    return ConversionResponse(value=converted, unit=target)
