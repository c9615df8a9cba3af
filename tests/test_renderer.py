import json
import re

from nutricatalog.core.content import LEGAL_PAGES
from nutricatalog.models import CategoryGroup
from nutricatalog.services import metadata
from nutricatalog.services.renderer import dump_json_ld
from tests.conftest import make_food


def test_document_has_head_tags_and_body(renderer, settings):
    food = make_food("domates", "Domates", 22, serving_label="1 orta domates (123g)")
    body = renderer.render_page("food_detail.html", {"food": food, "macros": [], "related": [], "category_groups": []})
    html = renderer.render_document(body, metadata.meta_for_food(settings, food), [{"@type": "Organization"}])

    assert html.startswith("<!DOCTYPE html>")
    assert '<html lang="en">' in html
    assert '<meta charset="utf-8">' in html
    assert 'name="viewport"' in html
    assert f'<link rel="canonical" href="{settings.base_url}/domates">' in html
    assert 'property="og:title"' in html
    assert 'name="twitter:title"' in html
    assert "123g" in html
    assert html.rstrip().endswith("</html>")


def test_missing_optional_fields_are_omitted(renderer, settings):
    meta = metadata.meta_for_home(settings)
    html = renderer.render_document(renderer.render_page("server_error.html", {}), meta, [])

    assert "og:image" not in html
    assert "twitter:image" not in html
    assert "None" not in html
    assert "undefined" not in html


def test_one_script_block_per_structured_data_document(renderer, settings):
    docs = [{"@type": "Organization"}, {"@type": "FAQPage"}, {"@type": "BreadcrumbList"}]
    html = renderer.render_document(renderer.render_page("server_error.html", {}), metadata.meta_for_home(settings), docs)

    blocks = re.findall(r'<script type="application/ld\+json">(.*?)</script>', html, re.S)
    assert len(blocks) == 3
    assert [json.loads(block)["@type"] for block in blocks] == ["Organization", "FAQPage", "BreadcrumbList"]


def test_json_ld_cannot_close_its_script_tag():
    text = str(dump_json_ld({"name": "</script><script>alert(1)</script>"}))
    assert "</script>" not in text
    assert json.loads(text)["name"] == "</script><script>alert(1)</script>"


def test_page_markup_is_escaped(renderer):
    food = make_food("x", "<b>Evil</b>", 10)
    body = renderer.render_page("food_detail.html", {"food": food, "macros": [], "related": [], "category_groups": []})
    assert "<b>Evil</b>" not in body
    assert "&lt;b&gt;Evil&lt;/b&gt;" in body


def test_layout_links_categories_by_slug(renderer):
    groups = [CategoryGroup(main_category="Süt ve Süt Ürünleri", subcategories=["Yoğurt"])]
    body = renderer.render_page("calculators_hub.html", {"category_groups": groups})
    assert 'href="/category/sut-sut-urunleri"' in body
    assert 'href="/category/sut-sut-urunleri/yogurt"' in body


def test_legal_page_shows_fixed_last_updated_date(renderer):
    page = LEGAL_PAGES["privacy-policy"]
    first = renderer.render_page("legal.html", {"page": page, "category_groups": []})
    second = renderer.render_page("legal.html", {"page": page, "category_groups": []})
    assert page.last_updated.isoformat() in first
    assert first == second


def test_shell_loads_client_entry(renderer, settings):
    html = renderer.render_shell("/domates")
    assert '<div id="root"' in html
    assert settings.client_entry in html


def test_sitemap_template(renderer):
    xml = renderer.render_sitemap([{"loc": "https://example.test/", "priority": "1.0", "changefreq": "daily", "lastmod": ""}])
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<loc>https://example.test/</loc>" in xml
    assert "<priority>1.0</priority>" in xml
    assert "<lastmod>" not in xml
