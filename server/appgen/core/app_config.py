# appgen/core/app_config.py
"""
Canonical shape of a generated mobile-app configuration.

Attributes are snake_case in Python and camelCase on the wire (the shape the
model is asked to emit and the dashboard stores).
"""
import copy
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"

BACKGROUND_TYPES = ("color", "gradient")
DISPLAY_STYLES = ("grid", "list", "carousel")


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ThemeConfig(_WireModel):
    primary_color: str = Field(..., pattern=HEX_COLOR_PATTERN)
    font_family: str
    border_radius: str


class NavigationTab(_WireModel):
    name: str
    icon: str
    route: str


class NavigationConfig(_WireModel):
    show_bottom_nav: bool
    show_search: bool
    show_cart: bool
    tabs: List[NavigationTab] = Field(..., min_length=1)


class HeroSection(_WireModel):
    title: str
    subtitle: str
    show_hero: bool
    background_type: Literal["color", "gradient"]


class ProductDisplay(_WireModel):
    grid_columns: int = Field(..., ge=1)
    show_prices: bool
    show_ratings: bool
    show_wishlist: bool


class CategoriesLayout(_WireModel):
    show_categories: bool
    display_style: Literal["grid", "list", "carousel"]


class LayoutConfig(_WireModel):
    hero_section: HeroSection
    product_display: ProductDisplay
    categories: CategoriesLayout


class FeaturesConfig(_WireModel):
    wishlist: bool
    reviews: bool
    filters: bool
    notifications: bool
    user_account: bool
    social_sharing: bool


class FeaturedProduct(_WireModel):
    name: str
    price: str = Field(..., description="Formatted price, e.g. '$29.99'")
    image: Optional[str] = None


class PreviewCategory(_WireModel):
    name: str
    count: int = Field(..., ge=0)


class PreviewData(_WireModel):
    featured_products: List[FeaturedProduct] = Field(..., min_length=1)
    categories: List[PreviewCategory] = Field(..., min_length=1)


class AppConfig(_WireModel):
    app_name: str
    primary_color: str = Field(..., pattern=HEX_COLOR_PATTERN)
    theme: ThemeConfig
    navigation: NavigationConfig
    layout: LayoutConfig
    features: FeaturesConfig
    preview_data: PreviewData

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def preview_summary(self) -> Dict[str, Any]:
        """Denormalized preview stored next to a generated app record."""
        wire = self.to_wire()
        return {
            "appName": wire["appName"],
            "primaryColor": wire["primaryColor"],
            "featuredProducts": wire["previewData"]["featuredProducts"],
            "heroSection": wire["layout"]["heroSection"],
            "categories": wire["previewData"]["categories"],
        }


# ----------------------------
# Hard defaults
# ----------------------------
DEFAULT_FONT_FAMILY = "Inter, sans-serif"
DEFAULT_BORDER_RADIUS = "8px"
DEFAULT_HERO_SUBTITLE = "Discover amazing products"

DEFAULT_TABS = (
    {"name": "Home", "icon": "home", "route": "/"},
    {"name": "Shop", "icon": "grid", "route": "/shop"},
    {"name": "Cart", "icon": "shopping-bag", "route": "/cart"},
    {"name": "Profile", "icon": "user", "route": "/profile"},
)

DEFAULT_FEATURED_PRODUCTS = (
    {"name": "Featured Product 1", "price": "$29.99"},
    {"name": "Featured Product 2", "price": "$39.99"},
    {"name": "Featured Product 3", "price": "$19.99"},
    {"name": "Featured Product 4", "price": "$49.99"},
)

DEFAULT_CATEGORIES = (
    {"name": "All Products", "count": 10},
    {"name": "New Arrivals", "count": 5},
    {"name": "Best Sellers", "count": 8},
)


def default_config_data(app_name: str, primary_color: str) -> Dict[str, Any]:
    """Wire-shaped hard defaults for a fresh generation."""
    return {
        "appName": app_name,
        "primaryColor": primary_color,
        "theme": {
            "primaryColor": primary_color,
            "fontFamily": DEFAULT_FONT_FAMILY,
            "borderRadius": DEFAULT_BORDER_RADIUS,
        },
        "navigation": {
            "showBottomNav": True,
            "showSearch": True,
            "showCart": True,
            "tabs": copy.deepcopy(list(DEFAULT_TABS)),
        },
        "layout": {
            "heroSection": {
                "title": f"Welcome to {app_name}",
                "subtitle": DEFAULT_HERO_SUBTITLE,
                "showHero": True,
                "backgroundType": "gradient",
            },
            "productDisplay": {
                "gridColumns": 2,
                "showPrices": True,
                "showRatings": True,
                "showWishlist": True,
            },
            "categories": {
                "showCategories": True,
                "displayStyle": "grid",
            },
        },
        "features": {
            "wishlist": True,
            "reviews": True,
            "filters": True,
            "notifications": True,
            "userAccount": True,
            "socialSharing": False,
        },
        "previewData": {
            "featuredProducts": copy.deepcopy(list(DEFAULT_FEATURED_PRODUCTS)),
            "categories": copy.deepcopy(list(DEFAULT_CATEGORIES)),
        },
    }


def default_app_config(app_name: str, primary_color: str) -> AppConfig:
    return AppConfig.model_validate(default_config_data(app_name, primary_color))


def app_config_json_schema() -> Dict[str, Any]:
    """JSON schema of the wire shape, for model APIs that support constrained output."""
    return AppConfig.model_json_schema(by_alias=True)
