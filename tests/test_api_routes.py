import pytest
from fastapi.testclient import TestClient

from nutricatalog.core.config import Settings
from nutricatalog.main import create_app
from nutricatalog.services.sources.base import FoodSourceError
from nutricatalog.services.sources.local import LocalFoodSource

ADMIN_TOKEN = "s3cret"

NEW_FOOD = {
    "id": "99",
    "slug": "brokoli",
    "name": "Brokoli",
    "category": "Sebzeler",
    "subcategory": "Yeşil",
    "serving_label": "1 su bardağı (91g)",
    "calories": "31",
    "protein": 2.57,
}


class FailingSearchSource(LocalFoodSource):
    async def search_foods(self, query, limit=10):
        raise FoodSourceError("Local", "index unavailable")


@pytest.fixture
def admin_client(source):
    settings = Settings(base_url="https://example.test", admin_token=ADMIN_TOKEN, cache_sweep_enabled=False)
    with TestClient(create_app(settings=settings, source=source)) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_search_requires_three_characters(client):
    assert client.get("/api/foods/search", params={"q": "el"}).json() == {"foods": []}
    foods = client.get("/api/foods/search", params={"q": "elm"}).json()["foods"]
    assert [food["slug"] for food in foods] == ["elma"]


def test_search_matches_turkish_names(client):
    foods = client.get("/api/foods/search", params={"q": "havuç"}).json()["foods"]
    assert foods[0]["slug"] == "havuc"


def test_food_detail_with_alternatives(client):
    response = client.get("/api/foods/domates")
    assert response.status_code == 200
    body = response.json()
    assert body["food"]["name"] == "Domates"
    assert body["food"]["calories"] == 22
    slugs = [food["slug"] for food in body["alternatives"]]
    assert "domates" not in slugs
    assert len(slugs) == 3


def test_unknown_food_returns_404(client):
    response = client.get("/api/foods/nope")
    assert response.status_code == 404
    assert response.json()["detail"]["error_code"] == "FOOD_NOT_FOUND"


def test_foods_by_category_and_subcategory(client):
    category = client.get("/api/foods/category/Sebzeler").json()["foods"]
    assert [food["slug"] for food in category] == ["havuc", "domates"]
    subcategory = client.get("/api/foods/subcategory/Yeşil").json()["foods"]
    assert [food["slug"] for food in subcategory] == ["domates"]


def test_random_excludes_given_id(client):
    foods = client.get("/api/random", params={"count": 10, "exclude": "elma"}).json()["foods"]
    assert len(foods) == 3
    assert "elma" not in {food["id"] for food in foods}


def test_categories_and_groups(client):
    assert client.get("/api/categories").json() == ["Meyveler", "Sebzeler", "Süt ve Süt Ürünleri"]
    groups = client.get("/api/category-groups").json()
    sebzeler = next(group for group in groups if group["main_category"] == "Sebzeler")
    assert sebzeler["subcategories"] == ["Kök Sebzeler", "Yeşil"]


def test_create_food_requires_admin_token(client, admin_client):
    # No token configured at all
    assert client.post("/api/foods", json=NEW_FOOD, headers={"X-Admin-Token": "anything"}).status_code == 403
    # Wrong token
    assert admin_client.post("/api/foods", json=NEW_FOOD, headers={"X-Admin-Token": "wrong"}).status_code == 403
    assert admin_client.post("/api/foods", json=NEW_FOOD).status_code == 403


def test_create_food_invalidates_cached_listings(admin_client):
    # Warm the caches
    assert "Brokoli" not in admin_client.get("/category/sebzeler").text
    assert admin_client.get("/brokoli").status_code == 404

    response = admin_client.post("/api/foods", json=NEW_FOOD, headers={"X-Admin-Token": ADMIN_TOKEN})

    assert response.status_code == 201
    body = response.json()
    assert body["imported"] is True
    assert "category_Sebzeler" in body["invalidated_keys"]
    assert "Brokoli" in admin_client.get("/category/sebzeler").text
    assert admin_client.get("/brokoli").status_code == 200
    assert "https://example.test/brokoli" in admin_client.get("/sitemap.xml").text


def test_create_food_rejects_duplicates_and_reserved_slugs(admin_client):
    headers = {"X-Admin-Token": ADMIN_TOKEN}
    duplicate = dict(NEW_FOOD, slug="domates")
    assert admin_client.post("/api/foods", json=duplicate, headers=headers).status_code == 409
    reserved = dict(NEW_FOOD, slug="search")
    response = admin_client.post("/api/foods", json=reserved, headers=headers)
    assert response.status_code == 409
    assert response.json()["detail"]["error_code"] == "RESERVED_SLUG"


@pytest.mark.parametrize("slug", ["vitamin.c", "meyve/elma", "Brokoli"])
def test_create_food_rejects_unroutable_slugs(admin_client, slug):
    response = admin_client.post("/api/foods", json=dict(NEW_FOOD, slug=slug), headers={"X-Admin-Token": ADMIN_TOKEN})
    assert response.status_code == 422
    assert response.json()["detail"]["error_code"] == "INVALID_SLUG"


def test_rejected_dotted_slug_stays_out_of_the_sitemap(admin_client):
    admin_client.post("/api/foods", json=dict(NEW_FOOD, slug="vitamin.c"), headers={"X-Admin-Token": ADMIN_TOKEN})
    assert "vitamin.c" not in admin_client.get("/sitemap.xml").text
    assert admin_client.get("/vitamin.c").status_code == 404


def test_create_food_with_known_fdc_id_returns_existing_record(admin_client):
    headers = {"X-Admin-Token": ADMIN_TOKEN}
    first = admin_client.post("/api/foods", json=dict(NEW_FOOD, fdc_id=42), headers=headers)
    assert first.status_code == 201
    assert first.json()["imported"] is True

    second = admin_client.post("/api/foods", json=dict(NEW_FOOD, id="100", slug="brokoli-2", fdc_id=42), headers=headers)
    assert second.status_code == 200
    body = second.json()
    assert body["imported"] is False
    assert body["invalidated_keys"] == []
    assert body["food"]["slug"] == "brokoli"
    assert admin_client.get("/api/foods/brokoli-2").status_code == 404
    sebzeler = admin_client.get("/api/foods/category/Sebzeler").json()["foods"]
    assert [food["slug"] for food in sebzeler].count("brokoli") == 1


def test_unknown_api_path_returns_json_404(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["error_code"] == "NOT_FOUND"


def test_source_failure_maps_to_502(foods):
    settings = Settings(base_url="https://example.test", cache_sweep_enabled=False)
    app = create_app(settings=settings, source=FailingSearchSource(foods=foods))
    with TestClient(app) as test_client:
        response = test_client.get("/api/foods/search", params={"q": "elma"})
    assert response.status_code == 502
    assert response.json()["error_code"] == "FOOD_SOURCE_FAILURE"


def test_html_pages_carry_request_id(client):
    response = client.get("/domates")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "X-Request-ID" in response.headers


def test_unknown_page_returns_404_html(client):
    response = client.get("/category/a/b/c")
    assert response.status_code == 404
    assert "<!DOCTYPE html>" in response.text
