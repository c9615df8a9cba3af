"""schema.org JSON-LD documents embedded in rendered pages."""
from typing import Any, Dict, List, Tuple

from nutricatalog.core.config import Settings
from nutricatalog.core.content import (
    CONTACT_EMAIL,
    FOUNDING_YEAR,
    ORGANIZATION_DESCRIPTION,
    ORGANIZATION_NAME,
    LegalPage,
)
from nutricatalog.models import Food, format_amount, round_half_up

SCHEMA_CONTEXT = "https://schema.org"

StructuredData = Dict[str, Any]

# (attribute on Food, NutritionInformation property, unit)
NUTRIENT_FIELDS: Tuple[Tuple[str, str, str], ...] = (
    ("protein", "proteinContent", "g"),
    ("carbs", "carbohydrateContent", "g"),
    ("fat", "fatContent", "g"),
    ("fiber", "fiberContent", "g"),
    ("sugar", "sugarContent", "g"),
)


def organization(settings: Settings) -> StructuredData:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "name": ORGANIZATION_NAME,
        "url": settings.base_url,
        "logo": settings.absolute_url("/logo.png"),
    }


def about_organization(settings: Settings) -> StructuredData:
    return {
        **organization(settings),
        "description": ORGANIZATION_DESCRIPTION,
        "foundingDate": FOUNDING_YEAR,
        "email": CONTACT_EMAIL,
        "knowsAbout": [
            "Nutrition Facts",
            "Calorie Calculation",
            "Macronutrients",
            "Nutrition Science",
        ],
    }


def contact_page(settings: Settings, page: LegalPage) -> StructuredData:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "ContactPage",
        "name": f"{page.heading} - {settings.site_name}",
        "description": page.description,
        "url": settings.absolute_url(f"/{page.slug}"),
        "mainEntity": {
            "@type": "Organization",
            "name": ORGANIZATION_NAME,
            "email": CONTACT_EMAIL,
            "contactPoint": {
                "@type": "ContactPoint",
                "contactType": "Customer Service",
                "email": CONTACT_EMAIL,
            },
        },
    }


def faq_page(questions: List[Tuple[str, str]]) -> StructuredData:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": question,
                "acceptedAnswer": {"@type": "Answer", "text": answer},
            }
            for question, answer in questions
        ],
    }


def breadcrumbs(settings: Settings, trail: List[Tuple[str, str]]) -> StructuredData:
    """trail is a list of (name, site path) pairs, starting at the home page."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "name": name,
                "item": settings.absolute_url(path),
            }
            for position, (name, path) in enumerate(trail, start=1)
        ],
    }


def nutrition_information(food: Food) -> StructuredData:
    """
    NutritionInformation for one serving. Nutrients the record does not have
    are left out entirely; a stored zero is still reported.
    """
    if food.serving_size is not None:
        serving = f"{format_amount(food.serving_size)} g"
    else:
        serving = food.display_serving

    data: StructuredData = {
        "@context": SCHEMA_CONTEXT,
        "@type": "NutritionInformation",
        "servingSize": serving,
        "calories": f"{round_half_up(food.calories)} calories",
    }
    for attribute, prop, unit in NUTRIENT_FIELDS:
        value = getattr(food, attribute)
        if value is not None:
            data[prop] = f"{format_amount(value)} {unit}"
    return data


def food_documents(settings: Settings, food: Food) -> List[StructuredData]:
    return [
        breadcrumbs(settings, [("Home", "/"), (food.name, f"/{food.slug}")]),
        nutrition_information(food),
    ]
