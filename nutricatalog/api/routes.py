"""JSON API used by the client application (search box, food pages, admin import)."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response

from nutricatalog.core.config import Settings
from nutricatalog.core.logging_config import get_logger
from nutricatalog.core.rules import RESERVED_SLUGS
from nutricatalog.models import CategoryGroup, Food, FoodCreatedResponse, FoodDetailResponse, FoodListResponse
from nutricatalog.services.catalog_service import CatalogService
from nutricatalog.utils.slugs import is_routable_slug

logger = get_logger(__name__)

router = APIRouter(prefix="/api")

MIN_SEARCH_LENGTH = 3
MAX_SEARCH_RESULTS = 8
ALTERNATIVES_COUNT = 6


def get_catalog(request: Request) -> CatalogService:
    return request.app.state.catalog


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/foods/search", response_model=FoodListResponse)
async def search_foods(q: str = "", catalog: CatalogService = Depends(get_catalog)):
    query = q.strip()
    if len(query) < MIN_SEARCH_LENGTH:
        return FoodListResponse(foods=[])
    foods = await catalog.search_foods(query, MAX_SEARCH_RESULTS)
    return FoodListResponse(foods=foods)


@router.get("/foods/category/{category}", response_model=FoodListResponse)
async def foods_by_category(category: str, catalog: CatalogService = Depends(get_catalog)):
    return FoodListResponse(foods=await catalog.get_foods_by_category(category))


@router.get("/foods/subcategory/{subcategory}", response_model=FoodListResponse)
async def foods_by_subcategory(subcategory: str, catalog: CatalogService = Depends(get_catalog)):
    return FoodListResponse(foods=await catalog.get_foods_by_subcategory(subcategory))


@router.get("/foods/{slug}", response_model=FoodDetailResponse)
async def food_detail(slug: str, catalog: CatalogService = Depends(get_catalog)):
    food = await catalog.get_food_by_slug(slug)
    if food is None:
        raise HTTPException(
            status_code=404,
            detail={"error_code": "FOOD_NOT_FOUND", "message": f"No food with slug '{slug}'."},
        )
    alternatives = await catalog.get_random_foods(ALTERNATIVES_COUNT, exclude_id=food.id)
    return FoodDetailResponse(food=food, alternatives=alternatives)


@router.get("/random", response_model=FoodListResponse)
async def random_foods(
    count: int = Query(default=6, ge=1, le=50),
    exclude: Optional[str] = None,
    catalog: CatalogService = Depends(get_catalog),
):
    return FoodListResponse(foods=await catalog.get_random_foods(count, exclude_id=exclude))


@router.get("/categories", response_model=List[str])
async def categories(catalog: CatalogService = Depends(get_catalog)):
    groups = await catalog.get_category_groups()
    return [group.main_category for group in groups]


@router.get("/category-groups", response_model=List[CategoryGroup])
async def category_groups(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.get_category_groups()


@router.post("/foods", response_model=FoodCreatedResponse, status_code=201)
async def create_food(
    food: Food,
    response: Response,
    x_admin_token: Optional[str] = Header(default=None),
    catalog: CatalogService = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
):
    """
    Import one food record. Requires the X-Admin-Token header to match
    ADMIN_TOKEN; when no token is configured the endpoint is closed.

    A record whose fdc_id is already in the catalog is not imported again:
    the stored food comes back with imported=false and status 200.
    """
    if not settings.admin_token or x_admin_token != settings.admin_token:
        logger.warning("Rejected food import with missing or invalid admin token")
        raise HTTPException(
            status_code=403,
            detail={"error_code": "FORBIDDEN", "message": "A valid admin token is required."},
        )
    if food.fdc_id is not None:
        existing = await catalog.get_food_by_fdc_id(food.fdc_id)
        if existing is not None:
            logger.info(f"Food with fdc_id {food.fdc_id} already stored as {existing.slug}")
            response.status_code = 200
            return FoodCreatedResponse(food=existing, imported=False, invalidated_keys=[])
    if not is_routable_slug(food.slug):
        raise HTTPException(
            status_code=422,
            detail={
                "error_code": "INVALID_SLUG",
                "message": f"'{food.slug}' is not a valid slug; use lowercase letters, digits and hyphens.",
            },
        )
    if food.slug in RESERVED_SLUGS:
        raise HTTPException(
            status_code=409,
            detail={"error_code": "RESERVED_SLUG", "message": f"'{food.slug}' is a reserved path."},
        )
    try:
        invalidated = await catalog.add_food(food)
    except ValueError as exc:
        raise HTTPException(
            status_code=409,
            detail={"error_code": "DUPLICATE_SLUG", "message": str(exc)},
        )
    return FoodCreatedResponse(food=food, invalidated_keys=invalidated)
