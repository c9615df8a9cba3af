from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from nutricatalog.core.config import Settings
from nutricatalog.core.content import ABOUT_SLUG, CONTACT_SLUG, HOME_FAQ, LEGAL_PAGES
from nutricatalog.core.logging_config import get_logger
from nutricatalog.core.rules import CALCULATORS
from nutricatalog.models import CategoryGroup, MetaTags
from nutricatalog.services import metadata, structured_data
from nutricatalog.services.catalog_service import CatalogService
from nutricatalog.services.renderer import DocumentRenderer
from nutricatalog.services.routing import PageShape, RouteMatch, match_route
from nutricatalog.utils.slugs import find_category_group, find_subcategory

logger = get_logger(__name__)

RELATED_FOODS_COUNT = 6
HOME_POPULAR_COUNT = 6

MACRO_LABELS = (
    ("protein", "Protein"),
    ("carbs", "Carbohydrate"),
    ("fat", "Fat"),
    ("fiber", "Fiber"),
    ("sugar", "Sugar"),
)


@dataclass
class ResolvedPage:
    """Everything needed to render one page, gathered before rendering starts."""
    shape: PageShape
    template: str
    meta: MetaTags
    context: Dict[str, Any] = field(default_factory=dict)
    structured_data: List[Dict[str, Any]] = field(default_factory=list)
    status_code: int = 200


@dataclass
class RenderedPage:
    html: str
    status_code: int
    shape: PageShape


def parse_page(value: Optional[str]) -> int:
    """Page number from the query string; anything unusable means page 1."""
    try:
        page = int(value) if value is not None else 1
    except ValueError:
        return 1
    return page if page >= 1 else 1


class PageDispatcher:
    """
    Turns a request path into a complete HTML document.

    resolve() does all data access for a matched route; render() is a plain
    synchronous function of the resolved data. dispatch() runs both and is the
    only place errors are caught.
    """

    def __init__(self, catalog: CatalogService, renderer: DocumentRenderer, settings: Settings):
        self.catalog = catalog
        self.renderer = renderer
        self.settings = settings

    async def dispatch(self, path: str, query: Optional[Mapping[str, str]] = None) -> RenderedPage:
        try:
            match = match_route(path, query)
            resolved = await self.resolve(match, path)
            return RenderedPage(self.render(resolved), resolved.status_code, resolved.shape)
        except Exception:
            logger.exception(f"Failed to render {path}")
            return RenderedPage(self.render_server_error(path), 500, PageShape.SERVER_ERROR)

    async def resolve(self, match: RouteMatch, path: str = "/") -> ResolvedPage:
        groups = await self.catalog.get_category_groups()
        handler = {
            PageShape.HOME: self._resolve_home,
            PageShape.SEARCH: self._resolve_search,
            PageShape.ALL_FOODS: self._resolve_all_foods,
            PageShape.CALCULATORS_HUB: self._resolve_calculators_hub,
            PageShape.CALCULATOR: self._resolve_calculator,
            PageShape.CATEGORY: self._resolve_category,
            PageShape.SUBCATEGORY: self._resolve_subcategory,
            PageShape.LEGAL: self._resolve_legal,
            PageShape.FOOD_DETAIL: self._resolve_food,
        }.get(match.shape)

        if handler is None:
            resolved = self.not_found(path)
        else:
            resolved = await handler(match, path, groups)

        resolved.context.setdefault("category_groups", groups)
        resolved.structured_data.insert(0, structured_data.organization(self.settings))
        return resolved

    def render(self, resolved: ResolvedPage) -> str:
        body = self.renderer.render_page(resolved.template, resolved.context)
        return self.renderer.render_document(body, resolved.meta, resolved.structured_data)

    def render_server_error(self, path: str) -> str:
        # No data access here; the failure may have come from the data source
        body = self.renderer.render_page("server_error.html", {"category_groups": []})
        return self.renderer.render_document(
            body,
            metadata.meta_for_server_error(self.settings, path),
            [structured_data.organization(self.settings)],
        )

    def not_found(self, path: str, heading: str = "Page Not Found", message: Optional[str] = None) -> ResolvedPage:
        logger.info(f"Not found: {path} ({heading})")
        return ResolvedPage(
            shape=PageShape.NOT_FOUND,
            template="not_found.html",
            meta=metadata.meta_for_not_found(self.settings, path, heading),
            context={
                "heading": heading,
                "message": message or "The page you are looking for does not exist or has moved.",
            },
            status_code=404,
        )

    async def _resolve_home(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        foods = await self.catalog.get_popular_foods()
        return ResolvedPage(
            shape=PageShape.HOME,
            template="home.html",
            meta=metadata.meta_for_home(self.settings),
            context={"foods": foods[:HOME_POPULAR_COUNT], "faq": HOME_FAQ},
            structured_data=[structured_data.faq_page(HOME_FAQ)],
        )

    async def _resolve_search(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        query = (match.query.get("q") or "").strip()
        foods = await self.catalog.find_foods(query) if query else []
        return ResolvedPage(
            shape=PageShape.SEARCH,
            template="search.html",
            meta=metadata.meta_for_search(self.settings, query, len(foods)),
            context={"query": query, "foods": foods},
        )

    async def _resolve_all_foods(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        page = parse_page(match.query.get("page"))
        foods, total, total_pages = await self.catalog.get_page(page)
        return ResolvedPage(
            shape=PageShape.ALL_FOODS,
            template="all_foods.html",
            meta=metadata.meta_for_all_foods(self.settings, page, total_pages, total),
            context={"foods": foods, "page": page, "total": total, "total_pages": total_pages},
        )

    async def _resolve_calculators_hub(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        return ResolvedPage(
            shape=PageShape.CALCULATORS_HUB,
            template="calculators_hub.html",
            meta=metadata.meta_for_calculators_hub(self.settings),
        )

    async def _resolve_calculator(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        calculator = CALCULATORS[match.param]
        return ResolvedPage(
            shape=PageShape.CALCULATOR,
            template="calculator.html",
            meta=metadata.meta_for_calculator(self.settings, calculator),
            context={"calculator": calculator},
        )

    async def _resolve_category(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        category_slug = match.param
        group = find_category_group(category_slug, groups)
        if group is None:
            return self.not_found(path, "Category Not Found", "We could not find this category.")

        foods = await self.catalog.get_foods_by_category(group.main_category)
        return ResolvedPage(
            shape=PageShape.CATEGORY,
            template="category.html",
            meta=metadata.meta_for_category(self.settings, group.main_category, category_slug, len(foods)),
            context={
                "category": group.main_category,
                "subcategory": None,
                "subcategories": group.subcategories,
                "foods": foods,
            },
        )

    async def _resolve_subcategory(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        category_slug, subcategory_slug = match.params
        group = find_category_group(category_slug, groups)
        subcategory = find_subcategory(subcategory_slug, group) if group else None
        if group is None or subcategory is None:
            return self.not_found(path, "Category Not Found", "We could not find this subcategory.")

        foods = await self.catalog.get_foods_by_subcategory(subcategory)
        return ResolvedPage(
            shape=PageShape.SUBCATEGORY,
            template="category.html",
            meta=metadata.meta_for_subcategory(
                self.settings, group.main_category, subcategory, category_slug, subcategory_slug, len(foods)
            ),
            context={
                "category": group.main_category,
                "subcategory": subcategory,
                "subcategories": [],
                "foods": foods,
            },
        )

    async def _resolve_legal(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        page = LEGAL_PAGES[match.param]
        documents = []
        if page.slug == ABOUT_SLUG:
            documents.append(structured_data.about_organization(self.settings))
        elif page.slug == CONTACT_SLUG:
            documents.append(structured_data.contact_page(self.settings, page))
        return ResolvedPage(
            shape=PageShape.LEGAL,
            template="legal.html",
            meta=metadata.meta_for_legal(self.settings, page),
            context={"page": page},
            structured_data=documents,
        )

    async def _resolve_food(self, match: RouteMatch, path: str, groups: List[CategoryGroup]) -> ResolvedPage:
        food = await self.catalog.get_food_by_slug(match.param)
        if food is None:
            return self.not_found(path, "Food Not Found", "We could not find this food. Try searching for it instead.")

        category_foods = await self.catalog.get_foods_by_category(food.category)
        related = [f for f in category_foods if f.slug != food.slug][:RELATED_FOODS_COUNT]
        macros = [
            (label, getattr(food, attribute))
            for attribute, label in MACRO_LABELS
            if getattr(food, attribute) is not None
        ]
        return ResolvedPage(
            shape=PageShape.FOOD_DETAIL,
            template="food_detail.html",
            meta=metadata.meta_for_food(self.settings, food),
            context={"food": food, "macros": macros, "related": related},
            structured_data=structured_data.food_documents(self.settings, food),
        )
