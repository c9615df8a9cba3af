from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar
from nutricatalog.core.config import Settings
from nutricatalog.core.logging_config import get_logger
from nutricatalog.models import CategoryGroup, Food
from nutricatalog.services.cache import TTLCache
from nutricatalog.services.sources.base import FoodSource

logger = get_logger(__name__)

T = TypeVar("T")

CATEGORY_GROUPS_KEY = "all_categories"
POPULAR_FOODS_KEY = "popular_foods"
SITEMAP_FOODS_KEY = "sitemap_foods"
POPULAR_FOODS_COUNT = 12


def food_key(slug: str) -> str:
    return f"food_{slug}"


def category_key(category: str) -> str:
    return f"category_{category}"


def subcategory_key(subcategory: str) -> str:
    return f"subcategory_{subcategory}"


def search_key(query: str) -> str:
    return f"foods_search_{query.lower()}"


class CatalogService:
    """
    Cached read access to a FoodSource. Listings that change slowly go through
    the cache; anything random or paginated is read straight from the source.
    """

    def __init__(self, source: FoodSource, cache: TTLCache, settings: Settings):
        self.source = source
        self.cache = cache
        self.settings = settings

    async def _cached(self, key: str, ttl_seconds: int, fetch: Callable[[], Awaitable[T]]) -> T:
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        value = await fetch()
        self.cache.set(key, value, ttl_seconds)
        return value

    async def get_category_groups(self) -> List[CategoryGroup]:
        return await self._cached(
            CATEGORY_GROUPS_KEY,
            self.settings.category_cache_ttl_seconds,
            self.source.get_category_groups,
        )

    async def get_popular_foods(self) -> List[Food]:
        return await self._cached(
            POPULAR_FOODS_KEY,
            self.settings.popular_cache_ttl_seconds,
            lambda: self.source.list_foods(POPULAR_FOODS_COUNT),
        )

    async def get_sitemap_foods(self) -> List[Food]:
        return await self._cached(
            SITEMAP_FOODS_KEY,
            self.settings.listing_cache_ttl_seconds,
            self.source.get_all_foods,
        )

    async def get_foods_by_category(self, category: str) -> List[Food]:
        return await self._cached(
            category_key(category),
            self.settings.listing_cache_ttl_seconds,
            lambda: self.source.get_foods_by_category(category),
        )

    async def get_foods_by_subcategory(self, subcategory: str) -> List[Food]:
        return await self._cached(
            subcategory_key(subcategory),
            self.settings.listing_cache_ttl_seconds,
            lambda: self.source.get_foods_by_subcategory(subcategory),
        )

    async def get_food_by_slug(self, slug: str) -> Optional[Food]:
        # Misses are not cached so a newly added food shows up immediately.
        key = food_key(slug)
        food = self.cache.get(key)
        if food is None:
            food = await self.source.get_food_by_slug(slug)
            if food is not None:
                self.cache.set(key, food, self.settings.listing_cache_ttl_seconds)
        return food

    async def get_food_by_fdc_id(self, fdc_id: int) -> Optional[Food]:
        return await self.source.get_food_by_fdc_id(fdc_id)

    async def search_foods(self, query: str, limit: int = 8) -> List[Food]:
        return await self._cached(
            search_key(query),
            self.settings.popular_cache_ttl_seconds,
            lambda: self.source.search_foods(query, limit),
        )

    async def find_foods(self, query: str, limit: int = 50) -> List[Food]:
        """Uncached search for the results page."""
        return await self.source.search_foods(query, limit)

    async def get_page(self, page: int) -> Tuple[List[Food], int, int]:
        """Return (foods on page, total food count, total pages)."""
        page_size = self.settings.page_size
        total = await self.source.count_foods()
        total_pages = max(1, -(-total // page_size))
        foods = await self.source.list_foods(page_size, (page - 1) * page_size)
        return foods, total, total_pages

    async def get_random_foods(self, count: int, exclude_id: Optional[str] = None) -> List[Food]:
        return await self.source.get_random_foods(count, exclude_id)

    async def add_food(self, food: Food) -> List[str]:
        """Store a new food and drop every cached listing it could appear in."""
        await self.source.add_food(food)
        keys = [
            POPULAR_FOODS_KEY,
            SITEMAP_FOODS_KEY,
            CATEGORY_GROUPS_KEY,
            category_key(food.category),
            food_key(food.slug),
        ]
        if food.subcategory:
            keys.append(subcategory_key(food.subcategory))
        for key in keys:
            self.cache.delete(key)
        logger.info(f"Added food {food.slug}; invalidated {len(keys)} cache keys")
        return keys
