import pytest

from nutricatalog.services.cache import TTLCache
from nutricatalog.services.catalog_service import CatalogService
from nutricatalog.services.dispatcher import PageDispatcher, parse_page
from nutricatalog.services.routing import PageShape, match_route
from nutricatalog.services.sources.base import FoodSourceError
from nutricatalog.services.sources.local import LocalFoodSource
from tests.conftest import BASE_URL, make_food


class BrokenSource(LocalFoodSource):
    async def get_category_groups(self):
        raise FoodSourceError("Broken", "connection refused to db.internal:5432")


class BrokenFoodLookupSource(LocalFoodSource):
    async def get_food_by_slug(self, slug):
        raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_food_detail_end_to_end(dispatcher):
    page = await dispatcher.dispatch("/domates")

    assert page.status_code == 200
    assert page.shape is PageShape.FOOD_DETAIL
    title = page.html.split("<title>")[1].split("</title>")[0]
    assert "Domates" in title
    assert "22" in title
    assert f'<link rel="canonical" href="{BASE_URL}/domates">' in page.html
    assert "123g" in page.html.split("<body>")[1]


@pytest.mark.asyncio
async def test_food_detail_structured_data(dispatcher):
    resolved = await dispatcher.resolve(match_route("/domates"), "/domates")
    types = [doc["@type"] for doc in resolved.structured_data]
    assert types == ["Organization", "BreadcrumbList", "NutritionInformation"]


@pytest.mark.asyncio
async def test_unknown_food_is_not_found(dispatcher):
    page = await dispatcher.dispatch("/no-such-food")
    assert page.status_code == 404
    assert page.shape is PageShape.NOT_FOUND
    assert "Food Not Found" in page.html


@pytest.mark.asyncio
async def test_unknown_category_is_not_found_not_error(dispatcher):
    page = await dispatcher.dispatch("/category/unknown-category")
    assert page.shape is PageShape.NOT_FOUND
    assert page.status_code == 404


@pytest.mark.asyncio
async def test_category_and_subcategory_pages(dispatcher):
    category = await dispatcher.dispatch("/category/sebzeler")
    assert category.shape is PageShape.CATEGORY
    assert "Havuç" in category.html

    subcategory = await dispatcher.dispatch("/category/sebzeler/yesil")
    assert subcategory.shape is PageShape.SUBCATEGORY
    assert "Domates" in subcategory.html


@pytest.mark.asyncio
async def test_subcategory_must_belong_to_its_category(dispatcher):
    page = await dispatcher.dispatch("/category/meyveler/yesil")
    assert page.shape is PageShape.NOT_FOUND


@pytest.mark.asyncio
async def test_category_path_too_deep_is_not_found(dispatcher):
    page = await dispatcher.dispatch("/category/a/b/c")
    assert page.shape is PageShape.NOT_FOUND
    assert page.status_code == 404


@pytest.mark.asyncio
async def test_home_has_faq_structured_data(dispatcher):
    resolved = await dispatcher.resolve(match_route("/"))
    assert resolved.shape is PageShape.HOME
    assert [doc["@type"] for doc in resolved.structured_data] == ["Organization", "FAQPage"]


@pytest.mark.asyncio
async def test_about_and_contact_structured_data(dispatcher):
    about = await dispatcher.resolve(match_route("/about"), "/about")
    contact = await dispatcher.resolve(match_route("/contact"), "/contact")
    assert about.structured_data[-1]["@type"] == "Organization"
    assert "foundingDate" in about.structured_data[-1]
    assert contact.structured_data[-1]["@type"] == "ContactPage"


@pytest.mark.asyncio
async def test_search_page(dispatcher):
    page = await dispatcher.dispatch("/search", {"q": "elma"})
    assert page.shape is PageShape.SEARCH
    assert "Elma" in page.html

    empty = await dispatcher.dispatch("/search")
    assert empty.status_code == 200
    assert "Type a food name" in empty.html


@pytest.mark.asyncio
async def test_all_foods_pagination(cache, renderer, settings):
    many = [make_food(f"food-{i}", f"Food {i}", i) for i in range(35)]
    dispatcher = PageDispatcher(CatalogService(LocalFoodSource(foods=many), cache, settings), renderer, settings)

    first = await dispatcher.resolve(match_route("/all-foods", {"page": "abc"}), "/all-foods")
    assert first.context["page"] == 1
    assert len(first.context["foods"]) == 30
    assert first.context["total_pages"] == 2

    second = await dispatcher.resolve(match_route("/all-foods", {"page": "2"}), "/all-foods")
    assert len(second.context["foods"]) == 5

    beyond = await dispatcher.dispatch("/all-foods", {"page": "9"})
    assert beyond.status_code == 200
    assert "There are no foods on this page." in beyond.html


@pytest.mark.asyncio
async def test_calculator_pages(dispatcher):
    hub = await dispatcher.dispatch("/calculators")
    assert hub.shape is PageShape.CALCULATORS_HUB
    calculator = await dispatcher.dispatch("/calculators/bmi")
    assert calculator.shape is PageShape.CALCULATOR
    assert 'data-calculator="bmi"' in calculator.html
    unknown = await dispatcher.dispatch("/calculators/nope")
    assert unknown.shape is PageShape.NOT_FOUND


@pytest.mark.asyncio
async def test_dispatch_is_repeatable(dispatcher):
    first = await dispatcher.dispatch("/category/sebzeler/yesil")
    second = await dispatcher.dispatch("/category/sebzeler/yesil")
    assert first.shape is second.shape
    assert first.html == second.html


@pytest.mark.asyncio
async def test_category_groups_are_cached(dispatcher, cache):
    await dispatcher.dispatch("/")
    assert cache.has("all_categories")
    assert cache.has("popular_foods")


@pytest.mark.asyncio
async def test_source_failure_renders_generic_error(foods, renderer, settings):
    dispatcher = PageDispatcher(CatalogService(BrokenSource(foods=foods), TTLCache(), settings), renderer, settings)

    page = await dispatcher.dispatch("/domates")

    assert page.status_code == 500
    assert page.shape is PageShape.SERVER_ERROR
    assert "Something went wrong" in page.html
    assert "db.internal" not in page.html
    assert page.html.rstrip().endswith("</html>")


@pytest.mark.asyncio
async def test_unexpected_error_is_contained(foods, renderer, settings):
    dispatcher = PageDispatcher(
        CatalogService(BrokenFoodLookupSource(foods=foods), TTLCache(), settings), renderer, settings
    )
    page = await dispatcher.dispatch("/domates")
    assert page.status_code == 500
    assert "boom" not in page.html


@pytest.mark.parametrize("value,expected", [(None, 1), ("3", 3), ("0", 1), ("-2", 1), ("x", 1)])
def test_parse_page(value, expected):
    assert parse_page(value) == expected
