from typing import List, Optional, Dict
from pydantic import BaseModel, Field, constr
from datetime import datetime


class Micronutrient(BaseModel):
    amount: float
    unit: str


class Food(BaseModel):
    id: str
    fdc_id: Optional[int] = Field(default=None, description="Identifier in the external nutrition database")
    slug: constr(strip_whitespace=True, min_length=1)
    name: str
    name_en: Optional[str] = None
    category: str = "Other"
    subcategory: Optional[str] = None
    serving_size: Optional[float] = Field(default=None, description="Serving size in grams")
    serving_label: Optional[str] = Field(default=None, description="Human serving label, e.g. '1 medium tomato (123g)'")
    # Nutrition per serving
    calories: float
    protein: Optional[float] = None
    fat: Optional[float] = None
    carbs: Optional[float] = None
    fiber: Optional[float] = None
    sugar: Optional[float] = None
    micronutrients: Optional[Dict[str, Micronutrient]] = None
    image_url: Optional[str] = None
    cached_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def display_serving(self) -> str:
        if self.serving_label:
            return self.serving_label
        if self.serving_size is not None:
            return f"{format_amount(self.serving_size)}g"
        return "1 serving"

    @property
    def kcal(self) -> int:
        return round_half_up(self.calories)


class CategoryGroup(BaseModel):
    main_category: str
    subcategories: List[str] = Field(default_factory=list)


class MetaTags(BaseModel):
    title: str
    description: str
    keywords: str
    canonical: str
    og_type: str = "website"
    og_title: str
    og_description: str
    og_url: str
    og_image: Optional[str] = None
    twitter_card: str = "summary_large_image"
    twitter_title: str
    twitter_description: str
    twitter_image: Optional[str] = None
    robots: str = "index, follow"


class FoodListResponse(BaseModel):
    foods: List[Food]


class FoodDetailResponse(BaseModel):
    food: Food
    alternatives: List[Food] = Field(default_factory=list)


class FoodCreatedResponse(BaseModel):
    food: Food
    imported: bool = True
    invalidated_keys: List[str] = Field(default_factory=list)


def round_half_up(value: float) -> int:
    """Round like a nutrition label does (0.5 goes up), not banker's rounding."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def format_amount(value: float) -> str:
    """Format a nutrient amount without a trailing '.0' (22.0 -> '22', 0.25 -> '0.25')."""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0")
