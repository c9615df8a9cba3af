"""
MetaTags for every page shape.

build_meta is the only place a MetaTags value is constructed; the meta_for_*
functions just map page data into its arguments, so every page ends up with
the same complete field set.
"""
from typing import Optional

from nutricatalog.core.config import Settings
from nutricatalog.core.content import HOME_DESCRIPTION, HOME_KEYWORDS, HOME_TITLE, LegalPage
from nutricatalog.core.rules import ALL_FOODS_SLUG, CALCULATORS_HUB_PATH, CATEGORY_PREFIX, SEARCH_SLUG, Calculator
from nutricatalog.models import Food, MetaTags

NOINDEX = "noindex, follow"


def build_meta(
    settings: Settings,
    title: str,
    description: str,
    keywords: str,
    path: str,
    image: Optional[str] = None,
    robots: str = "index, follow",
    og_type: str = "website",
) -> MetaTags:
    full_title = f"{title} | {settings.site_name}"
    url = settings.absolute_url(path)
    return MetaTags(
        title=full_title,
        description=description,
        keywords=keywords,
        canonical=url,
        og_type=og_type,
        og_title=full_title,
        og_description=description,
        og_url=url,
        og_image=image,
        twitter_card="summary_large_image" if image else "summary",
        twitter_title=full_title,
        twitter_description=description,
        twitter_image=image,
        robots=robots,
    )


def meta_for_home(settings: Settings) -> MetaTags:
    return build_meta(settings, HOME_TITLE, HOME_DESCRIPTION, HOME_KEYWORDS, "/")


def meta_for_food(settings: Settings, food: Food) -> MetaTags:
    kcal = food.kcal
    title = f"{food.name} Calories and Nutrition Facts - {kcal} kcal"
    description = (
        f"{food.name} ({food.display_serving}) contains {kcal} calories. "
        f"See protein, carbohydrate, fat, vitamin and mineral values per serving."
    )
    keywords = ", ".join(
        [
            f"{food.name} calories",
            f"{food.name} nutrition facts",
            f"how many calories in {food.name}",
            f"{food.name} protein",
            food.category,
        ]
    )
    return build_meta(settings, title, description, keywords, f"/{food.slug}", image=food.image_url, og_type="article")


def meta_for_search(settings: Settings, query: str, result_count: int) -> MetaTags:
    if query:
        title = f"Search results for \"{query}\""
        description = f"{result_count} foods found for \"{query}\". See calories and nutrition values per serving."
    else:
        title = "Search Foods"
        description = "Search the food database by name to see calories and nutrition values per serving."
    # Result pages are thin and query-dependent
    return build_meta(settings, title, description, "food search, nutrition search, calorie search", f"/{SEARCH_SLUG}", robots=NOINDEX)


def meta_for_all_foods(settings: Settings, page: int, total_pages: int, total: int) -> MetaTags:
    title = "All Foods - Nutrition Facts A to Z"
    path = f"/{ALL_FOODS_SLUG}"
    if page > 1:
        title = f"{title} (Page {page} of {total_pages})"
        path = f"{path}?page={page}"
    description = f"Browse all {total} foods with serving-based calories, protein, carbohydrate and fat values."
    return build_meta(settings, title, description, "all foods, food list, nutrition table, calorie list", path)


def meta_for_category(settings: Settings, category: str, category_slug: str, food_count: int) -> MetaTags:
    title = f"{category} - Calories and Nutrition Facts"
    description = f"Nutrition values and calories per serving for {food_count} foods in the {category} category."
    keywords = f"{category} calories, {category} nutrition facts, {category} list"
    return build_meta(settings, title, description, keywords, f"/{CATEGORY_PREFIX}/{category_slug}")


def meta_for_subcategory(
    settings: Settings,
    category: str,
    subcategory: str,
    category_slug: str,
    subcategory_slug: str,
    food_count: int,
) -> MetaTags:
    title = f"{subcategory} ({category}) - Calories and Nutrition Facts"
    description = f"Nutrition values and calories per serving for {food_count} foods in {subcategory}, part of {category}."
    keywords = f"{subcategory} calories, {subcategory} nutrition facts, {category}"
    return build_meta(settings, title, description, keywords, f"/{CATEGORY_PREFIX}/{category_slug}/{subcategory_slug}")


def meta_for_calculators_hub(settings: Settings) -> MetaTags:
    return build_meta(
        settings,
        "Free Health and Nutrition Calculators",
        "Free calorie, BMI, body fat, ideal weight, water and protein calculators, backed by science-based formulas.",
        "health calculators, calorie calculator, BMI calculator, protein calculator",
        CALCULATORS_HUB_PATH,
    )


def meta_for_calculator(settings: Settings, calculator: Calculator) -> MetaTags:
    return build_meta(
        settings,
        calculator.title,
        calculator.description,
        calculator.keywords,
        f"{CALCULATORS_HUB_PATH}/{calculator.slug}",
    )


def meta_for_legal(settings: Settings, page: LegalPage) -> MetaTags:
    return build_meta(settings, page.title, page.description, page.keywords, f"/{page.slug}")


def meta_for_not_found(settings: Settings, path: str, title: str = "Page Not Found") -> MetaTags:
    return build_meta(
        settings,
        title,
        "The page you are looking for does not exist. Search the food database or browse the categories.",
        "",
        path,
        robots="noindex, nofollow",
    )


def meta_for_server_error(settings: Settings, path: str) -> MetaTags:
    return build_meta(
        settings,
        "Something Went Wrong",
        "An unexpected error occurred. Please try again in a moment.",
        "",
        path,
        robots="noindex, nofollow",
    )
