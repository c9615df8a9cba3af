import json
import os
import random
from typing import Dict, List, Optional
from pydantic import ValidationError
from nutricatalog.services.sources.base import FoodSource
from nutricatalog.models import CategoryGroup, Food
from nutricatalog.core.logging_config import get_logger
from nutricatalog.utils.slugs import is_routable_slug, to_slug

logger = get_logger(__name__)


class LocalFoodSource(FoodSource):
    """Food catalog backed by a JSON file holding a list of food records."""
    name = "Local"

    def __init__(self, file_path: str = "data/foods.json", persist: bool = False, foods: Optional[List[Food]] = None):
        self.file_path = file_path
        self.persist = persist
        if foods is None:
            self.foods: List[Food] = self._parse(self._load_data(file_path))
        else:
            self.foods = list(foods)
        self._by_slug: Dict[str, Food] = {food.slug: food for food in self.foods}

    def _load_data(self, file_path: str) -> List[dict]:
        if not os.path.exists(file_path):
            logger.warning(f"{file_path} not found. Starting with an empty catalog.")
            return []
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.error(f"Error decoding {file_path}")
            return []
        if not isinstance(data, list):
            logger.error(f"{file_path} must contain a JSON list of foods")
            return []
        return data

    def _parse(self, records: List[dict]) -> List[Food]:
        foods: List[Food] = []
        seen = set()
        for record in records:
            try:
                food = Food.model_validate(record)
            except ValidationError as exc:
                logger.warning(f"Skipping invalid food record {record.get('slug', '?') if isinstance(record, dict) else '?'}: {exc.error_count()} errors")
                continue
            if not is_routable_slug(food.slug):
                logger.warning(f"Skipping food with unroutable slug {food.slug!r}")
                continue
            if food.slug in seen:
                logger.warning(f"Skipping duplicate food slug {food.slug}")
                continue
            seen.add(food.slug)
            foods.append(food)
        logger.info(f"Loaded {len(foods)} foods from {self.file_path}")
        return foods

    async def get_food_by_slug(self, slug: str) -> Optional[Food]:
        return self._by_slug.get(slug)

    async def get_food_by_id(self, food_id: str) -> Optional[Food]:
        return next((f for f in self.foods if f.id == food_id), None)

    async def get_food_by_fdc_id(self, fdc_id: int) -> Optional[Food]:
        return next((f for f in self.foods if f.fdc_id == fdc_id), None)

    async def list_foods(self, limit: int, offset: int = 0) -> List[Food]:
        offset = max(0, offset)
        return self.foods[offset:offset + max(0, limit)]

    async def count_foods(self) -> int:
        return len(self.foods)

    async def get_all_foods(self) -> List[Food]:
        return list(self.foods)

    async def get_random_foods(self, count: int, exclude_id: Optional[str] = None) -> List[Food]:
        candidates = [f for f in self.foods if f.id != exclude_id]
        return random.sample(candidates, min(max(0, count), len(candidates)))

    async def search_foods(self, query: str, limit: int = 10) -> List[Food]:
        needle = query.strip().casefold()
        if not needle:
            return []
        slug_needle = to_slug(query)
        matches = [
            f for f in self.foods
            if needle in f.name.casefold()
            or (f.name_en and needle in f.name_en.casefold())
            or (slug_needle and slug_needle in f.slug)
        ]
        return matches[:limit]

    async def get_foods_by_category(self, category: str, limit: int = 50) -> List[Food]:
        foods = [f for f in self.foods if f.category == category]
        return sorted(foods, key=lambda f: f.calories, reverse=True)[:limit]

    async def get_foods_by_subcategory(self, subcategory: str, limit: int = 50) -> List[Food]:
        foods = [f for f in self.foods if f.subcategory == subcategory]
        return sorted(foods, key=lambda f: f.calories, reverse=True)[:limit]

    async def get_category_groups(self) -> List[CategoryGroup]:
        grouped: Dict[str, List[str]] = {}
        for food in self.foods:
            subcategories = grouped.setdefault(food.category, [])
            if food.subcategory and food.subcategory not in subcategories:
                subcategories.append(food.subcategory)
        return [
            CategoryGroup(main_category=main, subcategories=sorted(subs))
            for main, subs in sorted(grouped.items())
        ]

    async def add_food(self, food: Food) -> Food:
        if food.slug in self._by_slug:
            raise ValueError(f"A food with slug '{food.slug}' already exists")
        self.foods.append(food)
        self._by_slug[food.slug] = food
        if self.persist:
            self._save_data()
        return food

    def _save_data(self) -> None:
        try:
            directory = os.path.dirname(self.file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.file_path, "w", encoding="utf-8") as handle:
                json.dump([f.model_dump(mode="json") for f in self.foods], handle, indent=2, ensure_ascii=False)
        except OSError as exc:
            logger.warning(f"Failed to write food catalog: {exc}")
