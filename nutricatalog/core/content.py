"""Curated, hand-written copy: legal pages, the home page FAQ and contact details."""
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Tuple

from nutricatalog.core.rules import (
    ABOUT_SLUG,
    CONTACT_SLUG,
    COOKIE_SLUG,
    DATA_PROTECTION_SLUG,
    PRIVACY_SLUG,
    TERMS_SLUG,
)

CONTACT_EMAIL = "info@besindegerim.com"
ORGANIZATION_NAME = "Besin Değerim"
ORGANIZATION_DESCRIPTION = (
    "The most comprehensive food nutrition platform: real serving-based calories "
    "and nutrition values backed by USDA data."
)
FOUNDING_YEAR = "2024"

HOME_TITLE = "Nutrition Facts - Real Serving-Based Calories"
HOME_DESCRIPTION = (
    "Comprehensive food nutrition database with real serving-based calories, protein, "
    "carbohydrate, fat, vitamin and mineral values, plus free nutrition calculators."
)
HOME_KEYWORDS = (
    "nutrition facts, calorie calculator, serving calories, nutrition table, "
    "healthy eating, diet, protein, carbohydrate, vitamin"
)


@dataclass(frozen=True)
class LegalPage:
    slug: str
    title: str
    description: str
    keywords: str
    heading: str
    last_updated: date
    sections: Tuple[Tuple[str, Tuple[str, ...]], ...]


LEGAL_PAGES: Dict[str, LegalPage] = {
    page.slug: page
    for page in (
        LegalPage(
            slug=PRIVACY_SLUG,
            title="Privacy Policy",
            description="How we collect, use and protect personal data, and the rights you have over it.",
            keywords="privacy policy, personal data, data security",
            heading="Privacy Policy",
            last_updated=date(2025, 1, 15),
            sections=(
                ("Data we collect", (
                    "We do not require an account. We only process technical data such as your IP address, "
                    "browser type and pages visited, which web servers log automatically.",
                )),
                ("How we use data", (
                    "Technical data is used to keep the site secure and to understand which pages are useful. "
                    "Calculator inputs are processed in your browser and never sent to our servers.",
                )),
                ("Your rights", (
                    f"You can ask what data we hold about you and request its deletion by writing to {CONTACT_EMAIL}.",
                )),
            ),
        ),
        LegalPage(
            slug=TERMS_SLUG,
            title="Terms of Use",
            description="Rules for using the site, responsibilities, intellectual property and legal notices.",
            keywords="terms of use, terms of service, legal notice, intellectual property",
            heading="Terms of Use",
            last_updated=date(2025, 1, 15),
            sections=(
                ("Information only", (
                    "Nutrition values and calculator results are for general information and are not medical advice. "
                    "Consult a dietitian or physician before changing your diet.",
                )),
                ("Intellectual property", (
                    "Site texts, design and code belong to the site owner. Nutrition data is derived from public "
                    "USDA FoodData Central records.",
                )),
                ("Changes", (
                    "We may update these terms; the date at the bottom of this page shows the latest revision.",
                )),
            ),
        ),
        LegalPage(
            slug=DATA_PROTECTION_SLUG,
            title="Data Protection Notice",
            description="Data protection notice describing the data controller, processing purposes and your rights.",
            keywords="data protection, KVKK, GDPR, data controller",
            heading="Data Protection Notice",
            last_updated=date(2025, 1, 15),
            sections=(
                ("Data controller", (
                    f"The data controller for this site is {ORGANIZATION_NAME}, reachable at {CONTACT_EMAIL}.",
                )),
                ("Purposes and legal basis", (
                    "Technical log data is processed on the basis of legitimate interest to operate and secure the service.",
                )),
                ("Retention", (
                    "Server logs are kept for at most 90 days and then deleted.",
                )),
            ),
        ),
        LegalPage(
            slug=COOKIE_SLUG,
            title="Cookie Policy",
            description="Which cookies the site uses, why, and how you can manage them.",
            keywords="cookie policy, cookies, privacy",
            heading="Cookie Policy",
            last_updated=date(2025, 1, 15),
            sections=(
                ("What cookies are", (
                    "Cookies are small text files stored by your browser.",
                )),
                ("Cookies we use", (
                    "We use strictly necessary cookies and anonymous analytics cookies. We do not use advertising cookies.",
                )),
                ("Managing cookies", (
                    "You can block or delete cookies in your browser settings at any time.",
                )),
            ),
        ),
        LegalPage(
            slug=ABOUT_SLUG,
            title="About Us - The Comprehensive Nutrition Facts Platform",
            description=(
                "Real serving-based nutrition values for hundreds of foods and free science-based calculators. "
                "Learn about our mission, values and story."
            ),
            keywords="about us, nutrition platform, calorie calculation, mission, USDA data",
            heading="About Us",
            last_updated=date(2025, 2, 1),
            sections=(
                ("Our mission", (
                    "We make reliable nutrition information easy to read by showing values per real serving "
                    "instead of per 100 grams.",
                )),
                ("Our data", (
                    "Every value comes from USDA FoodData Central, reviewed and mapped to everyday servings.",
                )),
            ),
        ),
        LegalPage(
            slug=CONTACT_SLUG,
            title="Contact - Get in Touch",
            description=f"Questions, suggestions or partnership offers? Reach us at {CONTACT_EMAIL}.",
            keywords="contact, support, feedback, email",
            heading="Contact",
            last_updated=date(2025, 2, 1),
            sections=(
                ("Email", (
                    f"Write to {CONTACT_EMAIL}. We usually answer within two business days.",
                )),
            ),
        ),
    )
}


HOME_FAQ: List[Tuple[str, str]] = [
    (
        "What is this site?",
        "A food nutrition platform with real serving-based calorie, protein, carbohydrate, fat and "
        "vitamin/mineral values backed by USDA FoodData Central, plus free calculators.",
    ),
    (
        "Are the nutrition values accurate?",
        "Yes. All values come from the USDA FoodData Central database, which is built on laboratory "
        "analyses and is regularly updated.",
    ),
    (
        "How do I use the platform?",
        "Type a food name into the search box, pick a result and read the per-serving values on its detail page. "
        "The calculators menu has BMI, calorie and protein tools.",
    ),
    (
        "Are the calculators free?",
        "Yes. Every calculator is free and needs no registration.",
    ),
    (
        "What is BMI and how is it calculated?",
        "BMI is weight (kg) divided by height (m) squared. 18.5-24.9 is considered normal by WHO standards.",
    ),
    (
        "How much water do I need per day?",
        "A common rule is 30-40 ml per kilogram of body weight, more when active or in hot weather.",
    ),
]
