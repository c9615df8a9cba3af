import re
import unicodedata
from typing import List, Optional

from nutricatalog.core.logging_config import get_logger
from nutricatalog.models import CategoryGroup

logger = get_logger(__name__)

# Turkish letters without a plain decomposition into ASCII + diacritic
_TRANSLITERATION = str.maketrans({
    "ğ": "g",
    "ü": "u",
    "ş": "s",
    "ı": "i",
    "ö": "o",
    "ç": "c",
})


def to_slug(text: str) -> str:
    """
    Convert a display name into a URL slug, folding Turkish characters to ASCII.

    Example:
        >>> to_slug("Süt ve Süt Ürünleri")
        'sut-sut-urunleri'
    """
    # "İ".lower() would leave a combining dot behind
    text = text.replace("İ", "I").lower()
    text = unicodedata.normalize("NFD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.translate(_TRANSLITERATION)
    text = re.sub(r"\s+ve\s+", "-", text)
    text = text.replace("&", "")
    text = re.sub(r"[^a-z0-9\s-]", "", text)
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


def is_routable_slug(slug: str) -> bool:
    """A food slug can be served at /<slug> only when it is already in slug form."""
    return bool(slug) and slug == to_slug(slug)


def find_category_group(slug: str, groups: List[CategoryGroup]) -> Optional[CategoryGroup]:
    matches = [g for g in groups if to_slug(g.main_category) == slug]
    if len(matches) > 1:
        names = ", ".join(g.main_category for g in matches)
        logger.warning(f"Categories {names} share the slug '{slug}'; only {matches[0].main_category} is reachable")
    return matches[0] if matches else None


def find_subcategory(slug: str, group: CategoryGroup) -> Optional[str]:
    return next((sub for sub in group.subcategories if to_slug(sub) == slug), None)
