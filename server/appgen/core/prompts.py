# appgen/core/prompts.py
"""
Prompts used by the app-config pipeline.

Goals:
- Always describe the full JSON shape; without it the model invents its own.
- Ground the design in the merchant's real store when one is connected.
- For modifications, make targeted changes and return the complete config.

Everything here is a pure function of its arguments.
"""

import json
from typing import List, Optional

from appgen.core.app_config import AppConfig
from appgen.models import StoreContext
from appgen.utils.config import MAX_SAMPLE_COLLECTIONS, MAX_SAMPLE_PRODUCTS

APP_CONFIG_SHAPE = """{
  "appName": "string",
  "primaryColor": "string (hex color)",
  "theme": {
    "primaryColor": "string (hex color)",
    "fontFamily": "string",
    "borderRadius": "string"
  },
  "navigation": {
    "showBottomNav": boolean,
    "showSearch": boolean,
    "showCart": boolean,
    "tabs": [
      {"name": "string", "icon": "string", "route": "string"}
    ]
  },
  "layout": {
    "heroSection": {
      "title": "string",
      "subtitle": "string",
      "showHero": boolean,
      "backgroundType": "color or gradient"
    },
    "productDisplay": {
      "gridColumns": number (integer >= 1),
      "showPrices": boolean,
      "showRatings": boolean,
      "showWishlist": boolean
    },
    "categories": {
      "showCategories": boolean,
      "displayStyle": "grid or list or carousel"
    }
  },
  "features": {
    "wishlist": boolean,
    "reviews": boolean,
    "filters": boolean,
    "notifications": boolean,
    "userAccount": boolean,
    "socialSharing": boolean
  },
  "previewData": {
    "featuredProducts": [
      {"name": "string", "price": "string (formatted, e.g. $29.99)", "image": "string URL (optional)"}
    ],
    "categories": [
      {"name": "string", "count": number (integer >= 0)}
    ]
  }
}"""


def build_system_prompt() -> str:
    return (
        "You are an expert mobile app designer for e-commerce. Create modern, user-friendly mobile app "
        "configurations for Shopify stores.\n\n"
        "DESIGN PRINCIPLES:\n"
        " - Prioritize user experience and conversion optimization.\n"
        " - Use modern mobile design patterns and intuitive, accessible navigation.\n"
        " - Match the app design to the store's business type and customer needs.\n"
        " - Create engaging product discovery experiences.\n\n"
        "OUTPUT RULES:\n"
        " - Return EXACTLY one valid JSON object and nothing else (no markdown, no commentary).\n"
        " - The object must match this structure exactly:\n"
        f"{APP_CONFIG_SHAPE}\n"
    )


def summarize_store_context(store_context: Optional[StoreContext]) -> str:
    """
    Short text summary of the connected store, with a bounded sample of real
    products and collections.
    """
    if store_context is None:
        return "No store connected yet."

    lines: List[str] = [
        f"Store: {store_context.shop_name} with {store_context.product_count} products, "
        f"{store_context.collection_count} collections, and {store_context.order_count} orders."
    ]

    products = store_context.sample_products[:MAX_SAMPLE_PRODUCTS]
    if products:
        lines.append("Sample products:")
        for p in products:
            details = [p.price and f"price {p.price}", p.vendor and f"vendor {p.vendor}",
                       p.product_type and f"type {p.product_type}"]
            extra = ", ".join(d for d in details if d)
            lines.append(f" - {p.title}" + (f" ({extra})" if extra else ""))

    collections = store_context.sample_collections[:MAX_SAMPLE_COLLECTIONS]
    if collections:
        lines.append("Collections:")
        for c in collections:
            lines.append(f" - {c.title} ({c.products_count} products)")

    return "\n".join(lines)


def build_generation_prompt(prompt: str,
                            app_name: str,
                            primary_color: str,
                            store_context: Optional[StoreContext] = None) -> str:
    """
    Prompt for a fresh generation: system rules + business analysis + store facts.
    """
    store_summary = summarize_store_context(store_context)

    prompt_lines = [
        build_system_prompt(),
        "BUSINESS ANALYSIS:",
        f"App Name: {json.dumps(app_name, ensure_ascii=False)}",
        f"User Description: {json.dumps(prompt, ensure_ascii=False)}",
        f"Primary Color: {primary_color}",
        store_summary,
        "",
        "Task:",
        "1) Analyze the description to understand the business type, target audience and goals.",
        "2) Size the layout to the store (1-2 grid columns for small catalogs, 2-3 for larger ones).",
        "3) Enable features that make sense for the business (e.g. reviews for retail, filters for large catalogs).",
        "4) Write hero content that reflects the brand and its value proposition.",
        "5) Choose navigation tabs that fit the store's complexity.",
        "6) Generate 4-6 realistic featured products with formatted prices and realistic categories;"
        " prefer the real products and collections above when they are provided.",
        "7) Use the primary color above unless the description clearly asks for another.",
        "",
        "Output: the single JSON object described above. No extra text.",
    ]
    return "\n".join(prompt_lines)


def build_modification_prompt(current_config: AppConfig,
                              modification_prompt: str,
                              store_context: Optional[StoreContext] = None) -> str:
    """
    Prompt for modifying an existing config. The model sees the current config
    and is told to change only what is asked for.
    """
    current_json = json.dumps(current_config.to_wire(), indent=2, ensure_ascii=False)

    prompt_lines = [
        build_system_prompt(),
        "CURRENT CONFIGURATION:",
        current_json,
        "",
        summarize_store_context(store_context),
        "",
        "MODIFICATION REQUEST:",
        json.dumps(modification_prompt, ensure_ascii=False),
        "",
        "Task:",
        "- Apply ONLY the changes the modification request asks for.",
        "- Preserve every other field exactly as it is in the current configuration.",
        "- Return the COMPLETE updated configuration, not a diff.",
        "",
        "Output: the single JSON object described above. No extra text.",
    ]
    return "\n".join(prompt_lines)
