"""
Path classification for the server-rendered site.

A request path is split into its non-empty segments and checked against
ROUTE_RULES in order. The first rule whose segment count and literal first
segment match (and whose extra check, if any, accepts the segments) decides
the page shape. Reserved literals sit above the food-slug fallback, so they
always win over a food with the same slug.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from nutricatalog.core.rules import (
    ALL_FOODS_SLUG,
    CALCULATOR_PREFIX,
    CALCULATORS,
    CALCULATORS_HUB_SLUGS,
    CATEGORY_PREFIX,
    LEGAL_SLUGS,
    SEARCH_SLUG,
)


class PageShape(str, Enum):
    HOME = "home"
    SEARCH = "search"
    ALL_FOODS = "all_foods"
    CALCULATORS_HUB = "calculators_hub"
    CALCULATOR = "calculator"
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    LEGAL = "legal"
    FOOD_DETAIL = "food_detail"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class RouteRule:
    """
    One row of the routing table.

    segments: exact number of path segments the rule applies to.
    literals: allowed values of the first segment, or None for any value.
    accepts: optional extra predicate over all segments.
    keep_literal: whether the first segment is part of the extracted params.
    """
    segments: int
    literals: Optional[FrozenSet[str]]
    shape: PageShape
    accepts: Optional[Callable[[List[str]], bool]] = None
    keep_literal: bool = False

    def matches(self, parts: List[str]) -> bool:
        if len(parts) != self.segments:
            return False
        if self.literals is not None and parts[0] not in self.literals:
            return False
        return self.accepts is None or self.accepts(parts)

    def params(self, parts: List[str]) -> Tuple[str, ...]:
        if self.literals is None or self.keep_literal:
            return tuple(parts)
        return tuple(parts[1:])


@dataclass(frozen=True)
class RouteMatch:
    shape: PageShape
    params: Tuple[str, ...] = ()
    query: Dict[str, str] = field(default_factory=dict)

    @property
    def param(self) -> str:
        """First extracted parameter, or an empty string."""
        return self.params[0] if self.params else ""


def _plain_slug(parts: List[str]) -> bool:
    # "favicon.ico" and friends are files, not foods
    return "." not in parts[0]


def _known_calculator(parts: List[str]) -> bool:
    return parts[1] in CALCULATORS


ROUTE_RULES: Tuple[RouteRule, ...] = (
    RouteRule(0, None, PageShape.HOME),
    RouteRule(1, frozenset({SEARCH_SLUG}), PageShape.SEARCH),
    RouteRule(1, frozenset({ALL_FOODS_SLUG}), PageShape.ALL_FOODS),
    RouteRule(1, frozenset(CALCULATORS_HUB_SLUGS), PageShape.CALCULATORS_HUB),
    RouteRule(1, frozenset(LEGAL_SLUGS), PageShape.LEGAL, keep_literal=True),
    RouteRule(1, None, PageShape.FOOD_DETAIL, accepts=_plain_slug),
    RouteRule(2, frozenset({CATEGORY_PREFIX}), PageShape.CATEGORY),
    RouteRule(2, frozenset({CALCULATOR_PREFIX}), PageShape.CALCULATOR, accepts=_known_calculator),
    RouteRule(3, frozenset({CATEGORY_PREFIX}), PageShape.SUBCATEGORY),
)


def split_path(path: str) -> List[str]:
    return [part for part in (path or "").split("/") if part]


def match_route(path: str, query: Optional[Mapping[str, str]] = None) -> RouteMatch:
    """Classify a request path. Pure: the same input always yields the same match."""
    parts = split_path(path)
    query_params = dict(query or {})
    for rule in ROUTE_RULES:
        if rule.matches(parts):
            return RouteMatch(rule.shape, rule.params(parts), query_params)
    return RouteMatch(PageShape.NOT_FOUND, tuple(parts), query_params)
