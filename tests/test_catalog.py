"""Tests for the static capability catalogs and the registries built from them."""

import pytest

from fvwm_mcp.catalog import PROMPT_CATALOG, RESOURCE_CATALOG, TOOL_CATALOG, ResourceSpec, ToolSpec
from fvwm_mcp.prompts import PromptRegistry
from fvwm_mcp.resources import ResourceRegistry
from fvwm_mcp.tools import ToolRegistry


class TestCatalogIntegrity:
    """Keys are unique and every entry has a usable shape."""

    def test_resource_uris_are_unique(self):
        uris = [spec.uri for spec in RESOURCE_CATALOG]
        assert len(uris) == len(set(uris)) == 15

    def test_tool_names_are_unique(self):
        names = [spec.name for spec in TOOL_CATALOG]
        assert len(names) == len(set(names)) == 10

    def test_prompt_names_are_unique(self):
        names = [spec.name for spec in PROMPT_CATALOG]
        assert len(names) == len(set(names)) == 5

    def test_resource_uris_use_private_scheme_groups(self):
        groups = {spec.uri.split("://", 1)[1].split("/", 1)[0] for spec in RESOURCE_CATALOG}
        assert all(spec.uri.startswith("fvwm://") for spec in RESOURCE_CATALOG)
        assert groups == {"config", "docs", "scripts", "state", "logs"}

    def test_tool_schemas_are_objects(self):
        for spec in TOOL_CATALOG:
            assert spec.input_schema["type"] == "object"
            for field in spec.required_fields:
                assert field in spec.input_schema["properties"]

    def test_required_fields(self):
        required = {spec.name: spec.required_fields for spec in TOOL_CATALOG}
        assert required["fvwm_execute"] == ("command",)
        assert required["smart_tile_state"] == ("action",)
        assert required["fvwm_restart"] == ()

    def test_prompt_metadata_shape(self):
        menu = next(spec for spec in PROMPT_CATALOG if spec.name == "create-menu")
        assert menu.as_metadata()["arguments"] == [
            {"name": "menu_name", "description": "Name for the menu (e.g., 'WindowOpsMenu')", "required": True},
            {"name": "menu_items", "description": "Comma-separated list of menu items", "required": True},
        ]

    def test_specs_are_immutable(self):
        with pytest.raises(AttributeError):
            RESOURCE_CATALOG[0].uri = "fvwm://other"  # type: ignore[misc]


class TestRegistryConstruction:
    """Registries bind one handler per catalog entry and refuse inconsistent catalogs."""

    def test_registries_follow_declaration_order(self, settings, client):
        resources = ResourceRegistry(settings, client)
        tools = ToolRegistry(settings, client)
        prompts = PromptRegistry(settings)
        assert resources.specs() == RESOURCE_CATALOG
        assert tools.specs() == TOOL_CATALOG
        assert prompts.specs() == PROMPT_CATALOG

    def test_duplicate_resource_uri_rejected(self, settings, client):
        catalog = (RESOURCE_CATALOG[0], RESOURCE_CATALOG[0])
        with pytest.raises(ValueError, match="duplicate"):
            ResourceRegistry(settings, client, catalog=catalog)

    def test_resource_without_reader_rejected(self, settings, client):
        catalog = (ResourceSpec("fvwm://config/extra", "Extra", "Not wired", "text/plain"),)
        with pytest.raises(ValueError, match="no reader"):
            ResourceRegistry(settings, client, catalog=catalog)

    def test_tool_without_handler_rejected(self, settings, client):
        catalog = (ToolSpec("fvwm_unknown", "Not wired", {"type": "object", "properties": {}}),)
        with pytest.raises(ValueError, match="no handler"):
            ToolRegistry(settings, client, catalog=catalog)

    def test_duplicate_prompt_rejected(self, settings):
        with pytest.raises(ValueError, match="duplicate"):
            PromptRegistry(settings, catalog=(PROMPT_CATALOG[0], PROMPT_CATALOG[0]))

    def test_listing_cannot_mutate_catalog(self, settings, client):
        tools = ToolRegistry(settings, client)
        listed = tools.list_tools()
        listed[0]["inputSchema"]["required"] = []
        listed.clear()
        assert len(tools.list_tools()) == len(TOOL_CATALOG)
        assert tools.list_tools()[0]["name"] == "fvwm_execute"
