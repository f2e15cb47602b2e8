from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    # The browser client sends camelCase keys; Python code uses snake_case.
    model_config = ConfigDict(populate_by_name=True)


class FamilyMemberSummary(_CamelModel):
    name: str = Field(..., min_length=1)
    goal: str = "maintenance"
    target_calories: int = Field(2000, alias="targetCalories", gt=0)


class PantryItemSummary(_CamelModel):
    name: str = Field(..., min_length=1)
    quantity: float = 0


class MealPreferences(_CamelModel):
    cuisine_type: str = Field("", alias="cuisineType")
    dietary_restrictions: str = Field("", alias="dietaryRestrictions")


class RecommendationRequest(_CamelModel):
    family_members: list[FamilyMemberSummary] = Field(..., alias="familyMembers", min_length=1)
    pantry_items: list[PantryItemSummary] = Field(default_factory=list, alias="pantryItems")
    preferences: MealPreferences = Field(default_factory=MealPreferences)
    nutrition_plan: str = Field("", alias="nutritionPlan")


class RecommendationResponse(BaseModel):
    recommendations: dict[str, Any]
    repaired: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)


class ModelInfo(BaseModel):
    id: str
    owned_by: str = ""


class ModelListResponse(BaseModel):
    models: list[ModelInfo] = Field(default_factory=list)


class ConnectionStatus(_CamelModel):
    status: str
    key_prefix: str = Field("", alias="keyPrefix")
    models_count: int = Field(0, alias="modelsCount")
