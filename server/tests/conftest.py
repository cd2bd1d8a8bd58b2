# tests/conftest.py
"""
Shared pytest fixtures for the app-config pipeline tests.

Provides:
- Stub model invokers (canned text or a raised error)
- Sample requests and store snapshots
"""
import json
from typing import Any, Dict, List, Optional

import pytest

from appgen.core.app_config import default_app_config
from appgen.core.errors import ModelUnavailable
from appgen.models import GenerateRequest, ModifyRequest, StoreContext


class StubInvoker:
    """Returns a canned response (or raises) and records every prompt."""

    def __init__(self, response: Optional[str] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.prompts: List[str] = []

    async def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def stub_invoker():
    def _make(response: Any = None, error: Optional[Exception] = None) -> StubInvoker:
        if isinstance(response, dict):
            response = json.dumps(response)
        return StubInvoker(response=response, error=error)
    return _make


@pytest.fixture
def failing_invoker():
    return StubInvoker(error=ModelUnavailable("quota exceeded"))


@pytest.fixture
def generate_request():
    return GenerateRequest(prompt="clothing store", app_name="Acme", primary_color="#112233")


@pytest.fixture
def baseline_config():
    return default_app_config("Acme", "#112233")


@pytest.fixture
def shopify_store_data() -> Dict[str, Any]:
    return {
        "store": {"name": "Acme Outfitters", "currency": "USD"},
        "products": [
            {
                "title": "Linen Shirt",
                "vendor": "Acme",
                "product_type": "Shirts",
                "variants": [{"price": "45.00"}, {"price": "49.00"}],
            },
            {"title": "Canvas Tote", "vendor": "Acme", "product_type": "Bags", "variants": []},
            {"vendor": "no title, skipped"},
        ],
        "collections": [
            {"title": "Summer", "products_count": 12},
            {"title": "Accessories", "products_count": 4},
        ],
        "totalProducts": 120,
        "totalCollections": 2,
        "totalOrders": 37,
    }


@pytest.fixture
def store_context(shopify_store_data):
    return StoreContext.from_shopify_data(shopify_store_data)


@pytest.fixture
def modify_request(baseline_config):
    return ModifyRequest(current_config=baseline_config, modification_prompt="make the hero use a solid color")
