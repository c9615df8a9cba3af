import pytest
from fastapi.testclient import TestClient

from nutricatalog.core.config import Settings
from nutricatalog.main import create_app
from nutricatalog.models import Food
from nutricatalog.services.cache import TTLCache
from nutricatalog.services.catalog_service import CatalogService
from nutricatalog.services.dispatcher import PageDispatcher
from nutricatalog.services.renderer import DocumentRenderer
from nutricatalog.services.sources.local import LocalFoodSource

BASE_URL = "https://example.test"


def make_food(slug, name, calories, category="Sebzeler", subcategory=None, **extra):
    return Food(
        id=extra.pop("id", slug),
        slug=slug,
        name=name,
        calories=calories,
        category=category,
        subcategory=subcategory,
        **extra
    )


@pytest.fixture
def settings():
    """Settings for tests: fixed base URL, no background sweep."""
    return Settings(base_url=BASE_URL, cache_sweep_enabled=False, copyright_year=2025)


@pytest.fixture
def foods():
    return [
        make_food(
            "domates", "Domates", "22",
            subcategory="Yeşil",
            serving_size=123,
            serving_label="1 orta domates (123g)",
            protein=1.08, carbs=4.78, fat=0.25, fiber=1.5, sugar=3.23,
        ),
        make_food("havuc", "Havuç", 25, subcategory="Kök Sebzeler", serving_size=61, protein=0.57),
        make_food("elma", "Elma", 95, category="Meyveler", serving_label="1 orta elma (182g)"),
        make_food("yogurt", "Yoğurt", 149, category="Süt ve Süt Ürünleri", fat=0),
    ]


@pytest.fixture
def source(foods):
    return LocalFoodSource(foods=foods)


@pytest.fixture
def cache():
    return TTLCache()


@pytest.fixture
def catalog(source, cache, settings):
    return CatalogService(source, cache, settings)


@pytest.fixture
def renderer(settings):
    return DocumentRenderer(settings)


@pytest.fixture
def dispatcher(catalog, renderer, settings):
    return PageDispatcher(catalog, renderer, settings)


@pytest.fixture
def client(settings, source):
    app = create_app(settings=settings, source=source)
    with TestClient(app) as test_client:
        yield test_client
