from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from fvwm_mcp.catalog import PROMPT_CATALOG, PromptSpec
from fvwm_mcp.config import Settings
from fvwm_mcp.errors import MissingArgument, UnknownIdentifier
from fvwm_mcp.templates import TEMPLATES, PromptContext, render


@dataclass(frozen=True)
class PromptMessage:
    text: str
    role: str = "user"

    def as_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": {"type": "text", "text": self.text}}


@dataclass(frozen=True)
class PromptResult:
    description: str
    messages: Tuple[PromptMessage, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        return {"description": self.description, "messages": [message.as_dict() for message in self.messages]}


@dataclass(frozen=True)
class PromptDefinition:
    spec: PromptSpec

    @property
    def name(self) -> str:
        return self.spec.name

    def bind(self, arguments: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """Return the declared arguments as strings, failing on a blank required one."""
        supplied = arguments or {}
        bound: Dict[str, str] = {}
        for argument in self.spec.arguments:
            value = supplied.get(argument.name)
            text = "" if value is None else str(value).strip()
            if not text:
                if argument.required:
                    raise MissingArgument(f"prompt '{self.spec.name}'", argument.name)
                continue
            bound[argument.name] = text
        return bound


class PromptRegistry:
    def __init__(self, settings: Settings, catalog: Iterable[PromptSpec] = PROMPT_CATALOG) -> None:
        self._context = PromptContext.from_settings(settings)
        prompts: Dict[str, PromptDefinition] = {}
        for spec in catalog:
            if spec.name not in TEMPLATES:
                raise ValueError(f"no template bound to prompt {spec.name}")
            self._register(prompts, PromptDefinition(spec=spec))
        self._prompts: Mapping[str, PromptDefinition] = MappingProxyType(prompts)

    @staticmethod
    def _register(prompts: Dict[str, PromptDefinition], definition: PromptDefinition) -> None:
        if definition.name in prompts:
            raise ValueError(f"duplicate prompt name {definition.name}")
        prompts[definition.name] = definition

    @property
    def context(self) -> PromptContext:
        return self._context

    def specs(self) -> Tuple[PromptSpec, ...]:
        return tuple(definition.spec for definition in self._prompts.values())

    def list_prompts(self) -> List[Dict[str, Any]]:
        return [definition.spec.as_metadata() for definition in self._prompts.values()]

    def get_prompt(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> PromptResult:
        definition = self._prompts.get(name)
        if definition is None:
            raise UnknownIdentifier("prompt", name)
        bound = definition.bind(arguments)
        text = render(name, bound, self._context)
        return PromptResult(description=definition.spec.description, messages=(PromptMessage(text),))
