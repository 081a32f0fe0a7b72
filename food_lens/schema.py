"""Typed output contract for a food analysis.

Required members have no default, so a payload missing one fails pydantic
validation and the validator can name exactly which field was absent.
Optional members normalise falsy or malformed model output to their
documented defaults instead of failing.
"""
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from food_lens.constants import (
    CONFIDENCE_TIERS,
    DEFAULT_CONFIDENCE,
    DEFAULT_HEALTHIER_ALTERNATIVE,
    DEFAULT_MEAL_TYPE,
    TRUTHY_STRINGS,
)

RequiredText = Annotated[str, Field(min_length=1)]
Confidence = Literal["high", "medium", "low"]


def _text_or_none(value: Any) -> Optional[str]:
    match value:
        case bool():
            return None
        case str() if value:
            return value
        case int() | float():
            return str(value)
        case _:
            return None


def _as_bool(value: Any) -> bool:
    match value:
        case bool():
            return value
        case str():
            return value.strip().lower() in TRUTHY_STRINGS
        case int() | float():
            return bool(value)
        case _:
            return False


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class NutritionInfo(_WireModel):
    calories: RequiredText
    protein: RequiredText
    carbs: RequiredText
    fat: Optional[str] = None
    fiber: Optional[str] = None
    sugar: Optional[str] = None
    sodium: Optional[str] = None

    @field_validator("fat", "fiber", "sugar", "sodium", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)


class DietFriendly(_WireModel):
    keto: bool = False
    vegan: bool = False
    vegetarian: bool = False
    gluten_free: bool = Field(default=False, alias="glutenFree")

    @field_validator("keto", "vegan", "vegetarian", "gluten_free", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return _as_bool(value)


class AnalysisResult(_WireModel):
    food: RequiredText
    nutrition_info: NutritionInfo = Field(alias="nutritionInfo")
    healthier_alternative: str = Field(
        default=DEFAULT_HEALTHIER_ALTERNATIVE, alias="healthierAlternative"
    )
    meal_type: str = Field(default=DEFAULT_MEAL_TYPE, alias="mealType")
    is_diet_friendly: DietFriendly = Field(default_factory=DietFriendly, alias="isDietFriendly")
    confidence: Confidence = DEFAULT_CONFIDENCE
    raw_response: Optional[str] = Field(default=None, alias="rawResponse")

    @field_validator("healthier_alternative", mode="before")
    @classmethod
    def _alternative(cls, value: Any) -> str:
        return _text_or_none(value) or DEFAULT_HEALTHIER_ALTERNATIVE

    @field_validator("meal_type", mode="before")
    @classmethod
    def _meal_type(cls, value: Any) -> str:
        return _text_or_none(value) or DEFAULT_MEAL_TYPE

    @field_validator("is_diet_friendly", mode="before")
    @classmethod
    def _diet(cls, value: Any) -> Any:
        match value:
            case dict() | DietFriendly():
                return value
            case _:
                return DietFriendly()

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, value: Any) -> str:
        match value:
            case str() if value.strip().lower() in CONFIDENCE_TIERS:
                return value.strip().lower()
            case _:
                return DEFAULT_CONFIDENCE

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
