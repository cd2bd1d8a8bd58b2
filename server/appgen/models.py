from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from appgen.core.app_config import AppConfig, HEX_COLOR_PATTERN
from appgen.utils.config import DEFAULT_PRIMARY_COLOR


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _count(value: Any, default: int = 0) -> int:
    # snapshot counts come from stored JSON; anything unusable is the default
    if isinstance(value, bool):
        return default
    try:
        n = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return n if n >= 0 else default


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool) and str(value).strip():
        return str(value)
    return None


class StoreProductSample(_WireModel):
    title: str
    price: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = Field(None, alias="type")


class StoreCollectionSample(_WireModel):
    title: str
    products_count: int = 0


class StoreContext(_WireModel):
    shop_name: str
    product_count: int = 0
    collection_count: int = 0
    order_count: int = 0
    sample_products: List[StoreProductSample] = []
    sample_collections: List[StoreCollectionSample] = []

    @classmethod
    def from_shopify_data(cls, store_data: Dict[str, Any], shop_name: Optional[str] = None) -> "StoreContext":
        """
        Build a context from the Shopify snapshot saved when a store is
        connected: {store, products, collections, totalProducts, ...}.
        Malformed parts are skipped rather than raised: the context only
        enriches the prompt.
        """
        if not isinstance(store_data, dict):
            store_data = {}
        store = store_data.get("store")
        if not isinstance(store, dict):
            store = {}
        products = store_data.get("products")
        if not isinstance(products, list):
            products = []
        collections = store_data.get("collections")
        if not isinstance(collections, list):
            collections = []

        sample_products = []
        for p in products:
            if not isinstance(p, dict):
                continue
            title = _optional_text(p.get("title"))
            if title is None:
                continue
            variants = p.get("variants")
            price = None
            if isinstance(variants, list) and variants and isinstance(variants[0], dict):
                price = _optional_text(variants[0].get("price"))
            sample_products.append(StoreProductSample(
                title=title,
                price=price,
                vendor=_optional_text(p.get("vendor")),
                product_type=_optional_text(p.get("product_type")),
            ))

        sample_collections = []
        for c in collections:
            if not isinstance(c, dict):
                continue
            title = _optional_text(c.get("title"))
            if title is None:
                continue
            sample_collections.append(StoreCollectionSample(
                title=title,
                products_count=_count(c.get("products_count")),
            ))

        return cls(
            shop_name=shop_name or _optional_text(store.get("name")) or "Shopify store",
            product_count=_count(store_data.get("totalProducts"), len(products)) or len(products),
            collection_count=_count(store_data.get("totalCollections"), len(collections)) or len(collections),
            order_count=_count(store_data.get("totalOrders")),
            sample_products=sample_products,
            sample_collections=sample_collections,
        )


class _StoreAwareRequest(_WireModel):
    store_context: Optional[StoreContext] = None
    # raw Shopify snapshot; used only when store_context is not given
    store_data: Optional[Dict[str, Any]] = None

    def resolved_store_context(self) -> Optional[StoreContext]:
        if self.store_context is not None:
            return self.store_context
        if self.store_data:
            return StoreContext.from_shopify_data(self.store_data)
        return None


class GenerateRequest(_StoreAwareRequest):
    prompt: str = Field(..., min_length=1)
    app_name: str = Field(..., min_length=1)
    primary_color: str = Field(DEFAULT_PRIMARY_COLOR, pattern=HEX_COLOR_PATTERN)


class ModifyRequest(_StoreAwareRequest):
    current_config: AppConfig
    modification_prompt: str = Field(..., min_length=1)


class GenerationResult(_WireModel):
    config: AppConfig
    preview: Dict[str, Any]
    fallback_used: bool = False
    fallback_reason: Optional[str] = None
