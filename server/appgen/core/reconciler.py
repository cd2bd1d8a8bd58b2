# appgen/core/reconciler.py
"""
Merge an untrusted, partially populated candidate (parsed model output)
against a fully valid baseline.

The AppConfig shape is described once, in APP_CONFIG_FIELDS: nested dicts are
groups, everything else is a leaf rule. A leaf rule either returns an
acceptable value for the candidate or MISSING, in which case the baseline
value is kept. Groups recurse, so a missing or non-object group defers every
field inside it to the baseline.

reconcile() never raises and never returns a partially populated result.
"""
import copy
import math
import re
from typing import Any, Dict, Optional, Tuple

from appgen.core.app_config import (
    AppConfig,
    BACKGROUND_TYPES,
    DISPLAY_STYLES,
    HEX_COLOR_PATTERN,
)

MISSING = object()


class Rule:
    required = True

    def coerce(self, value: Any) -> Any:
        raise NotImplementedError


class Text(Rule):
    """Non-blank string."""

    def __init__(self, required: bool = True):
        self.required = required

    def coerce(self, value):
        if isinstance(value, str) and value.strip():
            return value
        return MISSING


class Color(Text):
    _pattern = re.compile(HEX_COLOR_PATTERN)

    def coerce(self, value):
        if isinstance(value, str) and self._pattern.match(value.strip()):
            return value.strip()
        return MISSING


class Price(Text):
    """Formatted price string; bare numbers are rendered with two decimals."""

    def coerce(self, value):
        if isinstance(value, bool):
            return MISSING
        if isinstance(value, (int, float)):
            if not math.isfinite(value) or value < 0:
                return MISSING
            return f"{value:.2f}"
        return super().coerce(value)


class Url(Text):
    def coerce(self, value):
        if isinstance(value, str) and value.strip().startswith(("http://", "https://")):
            return value.strip()
        return MISSING


class Flag(Rule):
    # presence-aware: an explicit False is a value, not an absence
    def coerce(self, value):
        if isinstance(value, bool):
            return value
        return MISSING


class NonNegativeInt(Rule):
    minimum = 0

    def coerce(self, value):
        if isinstance(value, bool):
            return MISSING
        if isinstance(value, float):
            if not math.isfinite(value) or not value.is_integer():
                return MISSING
            value = int(value)
        if isinstance(value, int) and value >= self.minimum:
            return value
        return MISSING


class PositiveInt(NonNegativeInt):
    minimum = 1


class Choice(Rule):
    def __init__(self, *allowed: str):
        self.allowed: Tuple[str, ...] = allowed

    def coerce(self, value):
        if isinstance(value, str) and value in self.allowed:
            return value
        return MISSING


class Items(Rule):
    """
    A sequence leaf. The candidate list replaces the baseline list wholesale;
    elements are never merged with baseline elements. Elements that are not
    objects, or lack a required item field, are dropped. If nothing survives
    the baseline list is kept.
    """

    def __init__(self, item_fields: Dict[str, Rule]):
        self.item_fields = item_fields

    def _coerce_item(self, raw) -> Optional[Dict[str, Any]]:
        if not isinstance(raw, dict):
            return None
        item: Dict[str, Any] = {}
        for key, rule in self.item_fields.items():
            value = rule.coerce(raw.get(key, MISSING))
            if value is MISSING:
                if rule.required:
                    return None
                continue
            item[key] = value
        return item

    def coerce(self, value):
        if not isinstance(value, list):
            return MISSING
        items = []
        for raw in value:
            item = self._coerce_item(raw)
            if item is not None:
                items.append(item)
        return items or MISSING


APP_CONFIG_FIELDS: Dict[str, Any] = {
    "appName": Text(),
    "primaryColor": Color(),
    "theme": {
        "primaryColor": Color(),
        "fontFamily": Text(),
        "borderRadius": Text(),
    },
    "navigation": {
        "showBottomNav": Flag(),
        "showSearch": Flag(),
        "showCart": Flag(),
        "tabs": Items({"name": Text(), "icon": Text(), "route": Text()}),
    },
    "layout": {
        "heroSection": {
            "title": Text(),
            "subtitle": Text(),
            "showHero": Flag(),
            "backgroundType": Choice(*BACKGROUND_TYPES),
        },
        "productDisplay": {
            "gridColumns": PositiveInt(),
            "showPrices": Flag(),
            "showRatings": Flag(),
            "showWishlist": Flag(),
        },
        "categories": {
            "showCategories": Flag(),
            "displayStyle": Choice(*DISPLAY_STYLES),
        },
    },
    "features": {
        "wishlist": Flag(),
        "reviews": Flag(),
        "filters": Flag(),
        "notifications": Flag(),
        "userAccount": Flag(),
        "socialSharing": Flag(),
    },
    "previewData": {
        "featuredProducts": Items({"name": Text(), "price": Price(), "image": Url(required=False)}),
        "categories": Items({"name": Text(), "count": NonNegativeInt()}),
    },
}


def reconcile(candidate: Any, baseline: Dict[str, Any], fields: Dict[str, Any] = APP_CONFIG_FIELDS) -> Dict[str, Any]:
    """
    Field-by-field coalesce of candidate over baseline. Only keys named in
    `fields` are produced; extra candidate keys are ignored.
    """
    if not isinstance(candidate, dict):
        return copy.deepcopy(baseline)

    out: Dict[str, Any] = {}
    for key, rule in fields.items():
        base_value = baseline[key]
        if isinstance(rule, dict):
            out[key] = reconcile(candidate.get(key), base_value, rule)
            continue
        value = rule.coerce(candidate.get(key, MISSING))
        out[key] = copy.deepcopy(base_value) if value is MISSING else value
    return out


def reconcile_app_config(candidate: Any, baseline: AppConfig) -> AppConfig:
    merged = reconcile(candidate, baseline.to_wire())
    return AppConfig.model_validate(merged)
