"""
Preference service.

Key/value persistence for last-used inputs, results and the shared unit
preference. Values are stored in a JSON column; every key has a typed default
that is returned when nothing (or nothing readable) is stored.
"""

import logging
from enum import Enum
from typing import Any, Dict, Union

from sqlalchemy.exc import StatementError
from sqlalchemy.orm import Session

from fitcalc.config import settings
from fitcalc.domain.measurements import UnitSystem
from fitcalc.models.preference import Preference

logger = logging.getLogger(__name__)


class StorageKey(str, Enum):
    """Fixed set of persisted keys."""

    # Shared
    UNIT_PREFERENCE = "fitCalc.unitPreference"
    GENDER = "fitCalc.gender"
    HEIGHT = "fitCalc.height"
    WEIGHT = "fitCalc.weight"

    # BMI
    BMI_RESULT = "fitCalc.bmiResult"

    # Body fat
    NECK = "fitCalc.neck"
    WAIST = "fitCalc.waist"
    HIP = "fitCalc.hip"
    BODY_FAT_RESULT = "fitCalc.bodyFatResult"

    # BMR
    AGE = "fitCalc.age"
    ACTIVITY_LEVEL = "fitCalc.activityLevel"
    BMR_RESULT = "fitCalc.bmrResult"

    # One-rep max
    LIFTING_WEIGHT = "fitCalc.liftingWeight"
    REPS = "fitCalc.reps"
    FORMULA = "fitCalc.formula"
    ONE_REP_MAX_RESULT = "fitCalc.oneRepMaxResult"


DEFAULTS: Dict[StorageKey, Any] = {
    StorageKey.UNIT_PREFERENCE: settings.default_unit_system,
    StorageKey.GENDER: "male",
    StorageKey.ACTIVITY_LEVEL: "sedentary",
    StorageKey.FORMULA: "brzycki",
}

_NO_DEFAULT = object()


def resolve_key(key: Union[StorageKey, str]) -> StorageKey:
    """
    Look up a storage key by its string form.

    Raises:
        KeyError: If the key is not one of the fixed keys
    """
    try:
        return StorageKey(key)
    except ValueError:
        raise KeyError(f"Unknown preference key '{key}'") from None


class PreferenceService:
    """Service for reading and writing stored preferences."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: Union[StorageKey, str], default: Any = _NO_DEFAULT) -> Any:
        """
        Read a stored value.

        Args:
            key: Storage key
            default: Value returned when nothing readable is stored
                (defaults to the key's typed default)

        Returns:
            The decoded value, or the default
        """
        key = resolve_key(key)
        if default is _NO_DEFAULT:
            default = DEFAULTS.get(key)

        try:
            row = self.db.query(Preference).filter(Preference.key == key.value).first()
        except (ValueError, StatementError):
            # The JSON column decodes on load; a corrupt payload fails here
            logger.warning(f"[PREFERENCES] Unreadable value for {key.value}, using default")
            return default

        if row is None:
            return default
        return row.value

    def get_all(self) -> Dict[str, Any]:
        """Every key with its stored value or default."""
        return {key.value: self.get(key) for key in StorageKey}

    def save(self, key: Union[StorageKey, str], value: Any) -> Any:
        """
        Store a value, replacing any previous one.

        Raises:
            ValueError: If the value cannot be serialized to JSON
        """
        key = resolve_key(key)

        row = self.db.query(Preference).filter(Preference.key == key.value).first()
        if row is None:
            row = Preference(key=key.value, value=value)
            self.db.add(row)
        else:
            row.value = value

        try:
            self.db.commit()
        except StatementError as e:
            self.db.rollback()
            if not isinstance(e.orig, (TypeError, ValueError)):
                raise
            raise ValueError(
                f"Value for {key.value} is not JSON serializable: {e.orig}"
            ) from e

        logger.debug(f"[PREFERENCES] Saved {key.value}")
        return value

    def save_many(self, values: Dict[StorageKey, Any]) -> None:
        """Store several values, skipping None."""
        for key, value in values.items():
            if value is not None:
                self.save(key, value)

    def clear_all(self) -> int:
        """
        Remove every stored preference.

        Returns:
            Number of rows deleted
        """
        keys = [key.value for key in StorageKey]
        deleted = (
            self.db.query(Preference)
            .filter(Preference.key.in_(keys))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        logger.info(f"[PREFERENCES] Cleared {deleted} stored values")
        return deleted

    def get_unit_system(self) -> UnitSystem:
        """The shared unit preference, standardized to metric/imperial."""
        stored = self.get(StorageKey.UNIT_PREFERENCE)
        try:
            return UnitSystem.parse(stored)
        except ValueError:
            logger.warning(f"[PREFERENCES] Ignoring stored unit preference {stored!r}")
            return UnitSystem.parse(settings.default_unit_system)

    def set_unit_system(self, unit: Union[UnitSystem, str]) -> UnitSystem:
        """Store the unit preference; "cm"/"inches" are saved as metric/imperial."""
        unit_system = UnitSystem.parse(unit)
        self.save(StorageKey.UNIT_PREFERENCE, unit_system.value)
        return unit_system

    def resolve_unit_system(self, requested: Union[UnitSystem, str, None]) -> UnitSystem:
        """
        Unit system for a calculation request.

        The requested unit when one is given, otherwise the stored preference.
        Nothing is stored here; callers save the unit once the calculation
        succeeds.
        """
        if requested is None:
            return self.get_unit_system()
        return UnitSystem.parse(requested)
