# tests/test_config_agent.py
"""
End-to-end pipeline tests with stub invokers: generation falls back,
modification surfaces errors.
"""
import pytest

from appgen.core.config_agent import fallback_app_config, generate_app_config, modify_app_config
from appgen.core.errors import MalformedModelOutput, ModelUnavailable, ModificationFailed
from appgen.models import GenerateRequest, ModifyRequest


class TestGeneration:

    @pytest.mark.asyncio
    async def test_invoker_failure_returns_fallback(self, generate_request, failing_invoker):
        result = await generate_app_config(generate_request, failing_invoker)
        config = result.config
        assert result.fallback_used is True
        assert "ModelUnavailable" in result.fallback_reason
        assert config.app_name == "Acme"
        assert config.primary_color == "#112233"
        assert len(config.navigation.tabs) == 4
        assert len(config.preview_data.featured_products) >= 4

    @pytest.mark.asyncio
    async def test_malformed_output_returns_fallback(self, generate_request, stub_invoker):
        result = await generate_app_config(generate_request, stub_invoker("Sorry, I can't do that."))
        assert result.fallback_used is True
        assert result.config == fallback_app_config(generate_request)

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_fallback(self, generate_request, stub_invoker):
        result = await generate_app_config(generate_request, stub_invoker(error=ValueError("weird")))
        assert result.fallback_used is True
        assert result.config.app_name == "Acme"

    def test_fallback_is_deterministic(self, generate_request):
        first = fallback_app_config(generate_request).model_dump_json(by_alias=True)
        second = fallback_app_config(generate_request).model_dump_json(by_alias=True)
        assert first == second

    @pytest.mark.asyncio
    async def test_fallback_bytes_identical_across_failures(self, generate_request, stub_invoker, failing_invoker):
        a = await generate_app_config(generate_request, failing_invoker)
        b = await generate_app_config(generate_request, stub_invoker("not json"))
        assert a.config.model_dump_json(by_alias=True) == b.config.model_dump_json(by_alias=True)

    @pytest.mark.asyncio
    async def test_partial_model_output_is_merged_with_defaults(self, generate_request, stub_invoker):
        invoker = stub_invoker('```json\n{"appName": "Acme Wear", "features": {"reviews": false},'
                               ' "layout": {"productDisplay": {"gridColumns": 3}}}\n```')
        result = await generate_app_config(generate_request, invoker)
        config = result.config
        assert result.fallback_used is False
        assert config.app_name == "Acme Wear"
        assert config.features.reviews is False
        assert config.features.wishlist is True
        assert config.layout.product_display.grid_columns == 3
        assert config.layout.hero_section.title == "Welcome to Acme"
        assert result.preview["appName"] == "Acme Wear"

    @pytest.mark.asyncio
    async def test_store_context_reaches_prompt(self, stub_invoker, shopify_store_data):
        req = GenerateRequest.model_validate({"prompt": "p", "appName": "A", "storeData": shopify_store_data})
        invoker = stub_invoker({"appName": "A"})
        await generate_app_config(req, invoker)
        assert "Acme Outfitters" in invoker.prompts[0]
        assert "Linen Shirt" in invoker.prompts[0]

    @pytest.mark.asyncio
    async def test_malformed_store_snapshot_does_not_force_fallback(self, stub_invoker):
        req = GenerateRequest.model_validate({
            "prompt": "p",
            "appName": "A",
            "storeData": {"store": "x", "totalProducts": "many"},
        })
        result = await generate_app_config(req, stub_invoker({"appName": "From Model"}))
        assert result.fallback_used is False
        assert result.config.app_name == "From Model"


class TestModification:

    @pytest.mark.asyncio
    async def test_malformed_store_snapshot_is_ignored(self, baseline_config, stub_invoker):
        req = ModifyRequest.model_validate({
            "currentConfig": baseline_config.to_wire(),
            "modificationPrompt": "hide the cart",
            "storeData": {"store": 7, "collections": [{"title": "C", "products_count": "lots"}]},
        })
        config = await modify_app_config(req, stub_invoker({"navigation": {"showCart": False}}))
        assert config.navigation.show_cart is False

    @pytest.mark.asyncio
    async def test_omitted_group_is_preserved(self, baseline_config, stub_invoker):
        assert baseline_config.features.social_sharing is False
        req = ModifyRequest(current_config=baseline_config, modification_prompt="use a carousel for categories")
        invoker = stub_invoker({"layout": {"categories": {"displayStyle": "carousel"}}})

        config = await modify_app_config(req, invoker)

        assert config.features.social_sharing is False
        assert config.layout.categories.display_style == "carousel"
        assert config.navigation == baseline_config.navigation
        assert config.preview_data == baseline_config.preview_data

    @pytest.mark.asyncio
    async def test_baseline_is_previous_config_not_defaults(self, baseline_config, stub_invoker):
        customised = baseline_config.model_copy(deep=True)
        customised.layout.hero_section.title = "Summer Sale"
        customised.features.social_sharing = True
        req = ModifyRequest(current_config=customised, modification_prompt="hide the search bar")

        config = await modify_app_config(req, stub_invoker({"navigation": {"showSearch": False}}))

        assert config.navigation.show_search is False
        assert config.layout.hero_section.title == "Summer Sale"
        assert config.features.social_sharing is True

    @pytest.mark.asyncio
    async def test_prompt_contains_current_config(self, modify_request, stub_invoker):
        invoker = stub_invoker({})
        await modify_app_config(modify_request, invoker)
        assert "Welcome to Acme" in invoker.prompts[0]
        assert "make the hero use a solid color" in invoker.prompts[0]

    @pytest.mark.asyncio
    async def test_model_unavailable_is_surfaced(self, modify_request, failing_invoker):
        with pytest.raises(ModelUnavailable):
            await modify_app_config(modify_request, failing_invoker)

    @pytest.mark.asyncio
    async def test_malformed_output_is_surfaced(self, modify_request, stub_invoker):
        with pytest.raises(MalformedModelOutput):
            await modify_app_config(modify_request, stub_invoker("no config for you"))

    @pytest.mark.asyncio
    async def test_other_errors_become_modification_failed(self, modify_request, stub_invoker):
        with pytest.raises(ModificationFailed):
            await modify_app_config(modify_request, stub_invoker(error=KeyError("boom")))
