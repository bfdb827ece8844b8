"""Tests for the dispatcher's envelopes and its failure policy.

Tool calls always come back as envelopes; resource and prompt failures raise.
"""

import logging

import pytest

from fvwm_mcp.catalog import PROMPT_CATALOG, RESOURCE_CATALOG, TOOL_CATALOG
from fvwm_mcp.errors import AdapterFailure, MissingArgument, UnknownIdentifier


class TestListings:
    def test_list_resources_is_deterministic(self, dispatcher):
        first = dispatcher.list_resources()
        second = dispatcher.list_resources()
        assert len(first) == len(second) == len(RESOURCE_CATALOG)
        assert [r["uri"] for r in first] == [r["uri"] for r in second] == [s.uri for s in RESOURCE_CATALOG]

    def test_list_resources_wire_shape(self, dispatcher):
        assert dispatcher.list_resources()[0] == {
            "uri": "fvwm://config/main",
            "name": "FVWM3 Main Configuration",
            "description": "The complete FVWM3 configuration file (~/.fvwm/config)",
            "mimeType": "text/plain",
        }

    def test_list_tools(self, dispatcher):
        tools = dispatcher.list_tools()
        assert [t["name"] for t in tools] == [s.name for s in TOOL_CATALOG]
        assert tools[0]["inputSchema"]["required"] == ["command"]

    def test_list_prompts(self, dispatcher):
        assert [p["name"] for p in dispatcher.list_prompts()] == [s.name for s in PROMPT_CATALOG]


class TestReadResource:
    def test_envelope(self, dispatcher, settings):
        envelope = dispatcher.read_resource("fvwm://config/main")
        assert envelope["contents"][0]["uri"] == "fvwm://config/main"
        assert envelope["contents"][0]["mimeType"] == "text/plain"
        assert envelope["contents"][0]["text"] == settings.config_path.read_text()

    def test_unknown_uri_fails_before_any_adapter(self, dispatcher, runner):
        with pytest.raises(UnknownIdentifier):
            dispatcher.read_resource("fvwm://state/everything")
        assert runner.calls == []

    def test_adapter_failure_propagates(self, dispatcher):
        with pytest.raises(AdapterFailure):
            dispatcher.read_resource("fvwm://config/repo")


class TestCallTool:
    def test_success_envelope(self, dispatcher, runner):
        runner.respond("Beep", stdout="ok\n")
        assert dispatcher.call_tool("fvwm_execute", {"command": "Beep"}) == {
            "content": [{"type": "text", "text": "ok\n"}],
            "isError": False,
        }

    def test_failing_adapter_is_error_envelope(self, dispatcher, runner):
        runner.respond("Move 100p 100p", stderr="no window selected\n", returncode=2)
        envelope = dispatcher.call_tool("fvwm_execute", {"command": "Move 100p 100p"})
        assert envelope["isError"] is True
        assert envelope["content"][0]["type"] == "text"
        assert envelope["content"][0]["text"].startswith("Error executing tool 'fvwm_execute': ")
        assert "no window selected" in envelope["content"][0]["text"]

    def test_missing_binary_is_error_envelope(self, dispatcher, runner):
        runner.fail_with("FvwmCommand", FileNotFoundError(2, "No such file"))
        envelope = dispatcher.call_tool("fvwm_execute", {"command": "Beep"})
        assert envelope["isError"] is True
        assert "command not found" in envelope["content"][0]["text"]

    def test_unknown_tool_is_error_envelope(self, dispatcher):
        envelope = dispatcher.call_tool("fvwm_self_destruct", {})
        assert envelope["isError"] is True
        assert "fvwm_self_destruct" in envelope["content"][0]["text"]

    def test_missing_argument_is_error_envelope(self, dispatcher, runner):
        envelope = dispatcher.call_tool("fvwm_test_function", None)
        assert envelope["isError"] is True
        assert "function_name" in envelope["content"][0]["text"]
        assert runner.calls == []

    def test_invalid_argument_is_error_envelope(self, dispatcher):
        envelope = dispatcher.call_tool("smart_tile_state", {"action": "purge"})
        assert envelope == {
            "content": [{"type": "text", "text": "Error executing tool 'smart_tile_state': Unknown action: purge"}],
            "isError": True,
        }

    def test_unexpected_exception_is_error_envelope(self, dispatcher, runner, caplog):
        runner.fail_with("Beep", RuntimeError("runner exploded"))
        with caplog.at_level(logging.ERROR, logger="fvwm_mcp.dispatch"):
            envelope = dispatcher.call_tool("fvwm_execute", {"command": "Beep"})
        assert envelope["isError"] is True
        assert "runner exploded" in envelope["content"][0]["text"]
        assert any("raised unexpectedly" in record.getMessage() for record in caplog.records)

    def test_failure_does_not_poison_later_calls(self, dispatcher, runner):
        assert dispatcher.call_tool("nope")["isError"] is True
        assert dispatcher.call_tool("fvwm_restart")["isError"] is False


class TestGetPrompt:
    def test_envelope(self, dispatcher):
        envelope = dispatcher.get_prompt("create-menu", {"menu_name": "Ops", "menu_items": "Close, Reload, Exit"})
        assert envelope["description"] == "Generate an FVWM menu configuration"
        [message] = envelope["messages"]
        assert message["role"] == "user"
        assert message["content"]["type"] == "text"
        assert "1. Close\n2. Reload\n3. Exit" in message["content"]["text"]

    def test_unknown_prompt_raises(self, dispatcher):
        with pytest.raises(UnknownIdentifier):
            dispatcher.get_prompt("create-panel", {})

    def test_missing_argument_raises(self, dispatcher):
        with pytest.raises(MissingArgument):
            dispatcher.get_prompt("create-menu", {"menu_name": "Ops"})
