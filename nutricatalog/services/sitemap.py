from typing import Dict, List

from nutricatalog.core.config import Settings
from nutricatalog.core.rules import ALL_FOODS_SLUG, CALCULATORS, CALCULATORS_HUB_PATH, CATEGORY_PREFIX
from nutricatalog.models import CategoryGroup, Food
from nutricatalog.utils.slugs import to_slug

SitemapUrl = Dict[str, str]


def _url(settings: Settings, path: str, priority: str, changefreq: str, lastmod: str = "") -> SitemapUrl:
    return {
        "loc": settings.absolute_url(path),
        "priority": priority,
        "changefreq": changefreq,
        "lastmod": lastmod,
    }


def build_sitemap_urls(settings: Settings, groups: List[CategoryGroup], foods: List[Food]) -> List[SitemapUrl]:
    """
    Every indexable page with its priority: home, the calculator index and
    each calculator, the full listing, each category and subcategory, then
    every food. A location is listed once even if two sources produce it.
    """
    urls = [
        _url(settings, "/", "1.0", "daily"),
        _url(settings, CALCULATORS_HUB_PATH, "0.9", "monthly"),
    ]
    urls.extend(_url(settings, f"{CALCULATORS_HUB_PATH}/{slug}", "0.7", "monthly") for slug in CALCULATORS)
    urls.append(_url(settings, f"/{ALL_FOODS_SLUG}", "0.9", "daily"))

    for group in groups:
        main_slug = to_slug(group.main_category)
        urls.append(_url(settings, f"/{CATEGORY_PREFIX}/{main_slug}", "0.8", "weekly"))
        for sub in group.subcategories:
            urls.append(_url(settings, f"/{CATEGORY_PREFIX}/{main_slug}/{to_slug(sub)}", "0.7", "weekly"))

    for food in foods:
        stamp = food.updated_at or food.cached_at
        lastmod = stamp.date().isoformat() if stamp else ""
        urls.append(_url(settings, f"/{food.slug}", "0.8", "weekly", lastmod))

    seen = set()
    unique = []
    for url in urls:
        if url["loc"] in seen:
            continue
        seen.add(url["loc"])
        unique.append(url)
    return unique


def build_robots_txt(settings: Settings) -> str:
    return "\n".join(
        [
            "User-agent: *",
            "Allow: /",
            "Disallow: /api/",
            "",
            f"Sitemap: {settings.absolute_url('/sitemap.xml')}",
            "",
        ]
    )
