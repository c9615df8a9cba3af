from abc import ABC, abstractmethod
from typing import List, Optional
from nutricatalog.models import CategoryGroup, Food


class FoodSourceError(Exception):
    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class FoodSource(ABC):
    """
    Read access to the food catalog. Implementations raise FoodSourceError
    when the backing store itself fails; a missing record is None or [].
    """
    name: str = "Unknown"

    @abstractmethod
    async def get_food_by_slug(self, slug: str) -> Optional[Food]:
        pass

    @abstractmethod
    async def get_food_by_id(self, food_id: str) -> Optional[Food]:
        pass

    @abstractmethod
    async def get_food_by_fdc_id(self, fdc_id: int) -> Optional[Food]:
        pass

    @abstractmethod
    async def list_foods(self, limit: int, offset: int = 0) -> List[Food]:
        """Stable-ordered page of the full catalog."""
        pass

    @abstractmethod
    async def count_foods(self) -> int:
        pass

    @abstractmethod
    async def get_all_foods(self) -> List[Food]:
        pass

    @abstractmethod
    async def get_random_foods(self, count: int, exclude_id: Optional[str] = None) -> List[Food]:
        pass

    @abstractmethod
    async def search_foods(self, query: str, limit: int = 10) -> List[Food]:
        pass

    @abstractmethod
    async def get_foods_by_category(self, category: str, limit: int = 50) -> List[Food]:
        pass

    @abstractmethod
    async def get_foods_by_subcategory(self, subcategory: str, limit: int = 50) -> List[Food]:
        pass

    @abstractmethod
    async def get_category_groups(self) -> List[CategoryGroup]:
        pass

    @abstractmethod
    async def add_food(self, food: Food) -> Food:
        """Store a new food. Raises ValueError if its slug is already taken."""
        pass
