from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

# --- Reserved single-segment paths ---
# Checked before the food-slug fallback, so no food may use one of these slugs.
SEARCH_SLUG = "search"
ALL_FOODS_SLUG = "all-foods"
CALCULATORS_HUB_SLUGS: Tuple[str, ...] = ("calculators-hub", "calculators")
CATEGORY_PREFIX = "category"
CALCULATOR_PREFIX = "calculators"

# Canonical path of the calculator index
CALCULATORS_HUB_PATH = "/calculators"

PRIVACY_SLUG = "privacy-policy"
TERMS_SLUG = "terms-of-use"
DATA_PROTECTION_SLUG = "data-protection"
COOKIE_SLUG = "cookie-policy"
ABOUT_SLUG = "about"
CONTACT_SLUG = "contact"

LEGAL_SLUGS: Tuple[str, ...] = (
    PRIVACY_SLUG,
    TERMS_SLUG,
    DATA_PROTECTION_SLUG,
    COOKIE_SLUG,
    ABOUT_SLUG,
    CONTACT_SLUG,
)

RESERVED_SLUGS: FrozenSet[str] = frozenset(
    (SEARCH_SLUG, ALL_FOODS_SLUG, CATEGORY_PREFIX, "api", "sitemap.xml", "robots.txt", "health")
    + CALCULATORS_HUB_SLUGS
    + LEGAL_SLUGS
)


# --- Calculators ---
@dataclass(frozen=True)
class Calculator:
    slug: str
    title: str
    description: str
    keywords: str


CALCULATORS: Dict[str, Calculator] = {
    calc.slug: calc
    for calc in (
        Calculator(
            "daily-calorie",
            "Daily Calorie Needs Calculator - BMR & TDEE",
            "Find your daily calorie needs from BMR and TDEE with the Mifflin-St Jeor formula, including a macro split.",
            "daily calories, BMR calculator, TDEE, calorie needs, macronutrients",
        ),
        Calculator(
            "bmi",
            "BMI Calculator - Body Mass Index",
            "Calculate your Body Mass Index against WHO ranges and see your healthy weight range.",
            "BMI calculator, body mass index, ideal weight, healthy weight",
        ),
        Calculator(
            "body-fat",
            "Body Fat Percentage Calculator - Navy Method",
            "Estimate body fat percentage with the US Navy method from waist, neck and hip measurements.",
            "body fat percentage, navy method, body fat calculator",
        ),
        Calculator(
            "ideal-weight",
            "Ideal Weight Calculator - Devine & Broca Formulas",
            "Calculate your ideal weight from height and sex with the Devine and Broca formulas.",
            "ideal weight, ideal weight calculator, target weight",
        ),
        Calculator(
            "water-intake",
            "Daily Water Intake Calculator",
            "Work out how much water you need per day from your weight, activity level and climate.",
            "daily water intake, hydration, how much water per day",
        ),
        Calculator(
            "protein",
            "Daily Protein Requirement Calculator",
            "Calculate your daily protein needs for your goal and activity level.",
            "protein calculator, daily protein, protein requirement",
        ),
        Calculator(
            "portion-converter",
            "Portion Converter - Grams, Spoons and Cups",
            "Convert grams to portions and portions to spoons and cups.",
            "portion converter, grams to cups, spoon conversion",
        ),
        Calculator(
            "weight-loss-time",
            "Weight Loss / Gain Time Calculator",
            "Estimate how long it takes to reach your target weight with a steady calorie deficit.",
            "weight loss time, target weight, weight loss plan",
        ),
        Calculator(
            "bmr",
            "Basal Metabolic Rate (BMR) Calculator",
            "Calculate the calories your body burns at rest.",
            "BMR, basal metabolic rate, resting metabolism",
        ),
        Calculator(
            "macro",
            "Macro Split Calculator",
            "Split your daily calories into protein, carbohydrate and fat targets.",
            "macro calculator, macronutrient split, protein carbs fat",
        ),
        Calculator(
            "meal-plan",
            "Meal Planner",
            "Distribute your daily calories across meals.",
            "meal planner, meal plan calories",
        ),
        Calculator(
            "vitamin-mineral",
            "Vitamin and Mineral Needs Calculator",
            "See recommended daily intakes of vitamins and minerals for your age and sex.",
            "vitamin needs, mineral needs, RDA",
        ),
        Calculator(
            "one-rep-max",
            "1RM (One Rep Max) Calculator",
            "Estimate your one repetition maximum from a submaximal set.",
            "1RM, one rep max, strength calculator",
        ),
        Calculator(
            "calorie-burn",
            "Calories Burned Calculator",
            "Estimate calories burned by activity and duration.",
            "calories burned, exercise calories, MET",
        ),
        Calculator(
            "body-measurements",
            "Body Measurements and WHR Calculator",
            "Calculate waist-to-hip and waist-to-height ratios.",
            "waist to hip ratio, WHR, body measurements",
        ),
        Calculator(
            "food-comparison",
            "Food Comparison",
            "Compare the nutrition values of two foods side by side.",
            "food comparison, compare calories, nutrition comparison",
        ),
    )
}


# --- Crawler detection ---
# Matched case-insensitively against the User-Agent header.
BOT_USER_AGENT_PATTERN = r"bot|crawler|spider|crawling|googlebot|bingbot"

# Paths the render-strategy selector never classifies.
BYPASS_PATH_PREFIXES: Tuple[str, ...] = ("/api/", "/@", "/src/", "/static/", "/node_modules/", "/health", "/docs")
ASSET_EXTENSION_PATTERN = r"\.(js|mjs|css|map|png|jpg|jpeg|gif|svg|ico|webp|woff|woff2|ttf|eot|xml|txt|json)$"
