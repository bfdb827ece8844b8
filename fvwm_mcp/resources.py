from __future__ import annotations

from dataclasses import dataclass
from functools import partial
import json
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Tuple

from fvwm_mcp.catalog import RESOURCE_CATALOG, ResourceSpec
from fvwm_mcp.config import Settings
from fvwm_mcp.errors import AdapterFailure, UnknownIdentifier
from fvwm_mcp.fvwm_client import FvwmClient

Reader = Callable[[], str]

WINDOW_LIST_COMMAND = "All (CurrentPage) Echo $[w.id] $[w.name] $[w.x] $[w.y] $[w.width] $[w.height]"
DESKTOP_STATE_COMMAND = "Echo desk=$[desk.n] page=$[page.nx]x$[page.ny]"


@dataclass(frozen=True)
class ResourceContents:
    uri: str
    mime_type: str
    text: str

    def as_dict(self) -> Dict[str, str]:
        return {"uri": self.uri, "mimeType": self.mime_type, "text": self.text}


@dataclass(frozen=True)
class ResourceDefinition:
    spec: ResourceSpec
    reader: Reader

    @property
    def uri(self) -> str:
        return self.spec.uri

    def read(self) -> ResourceContents:
        return ResourceContents(uri=self.spec.uri, mime_type=self.spec.mime_type, text=self.reader())


class ResourceRegistry:
    def __init__(
        self,
        settings: Settings,
        client: FvwmClient,
        catalog: Iterable[ResourceSpec] = RESOURCE_CATALOG,
    ) -> None:
        self._settings = settings
        self._client = client

        files: Iterable[Tuple[str, Path]] = (
            ("fvwm://config/main", settings.config_path),
            ("fvwm://config/repo", settings.repo_config_path),
            ("fvwm://docs/claude", settings.architecture_doc),
            ("fvwm://docs/shortcuts", settings.shortcuts_doc),
            ("fvwm://docs/smart-tiling", settings.smart_tiling_doc),
            ("fvwm://docs/readme", settings.readme_doc),
            ("fvwm://scripts/smart-tile", settings.scripts_dir / "smart-tile.sh"),
            ("fvwm://scripts/maximize-monitor", settings.scripts_dir / "maximize-current-monitor.sh"),
            ("fvwm://scripts/monitor-setup", settings.scripts_dir / "monitor-setup.sh"),
            ("fvwm://scripts/toggle-keyboard", settings.scripts_dir / "toggle-keyboard-layout.sh"),
        )
        readers: Dict[str, Reader] = {uri: partial(client.read_file, path) for uri, path in files}
        readers.update(
            {
                "fvwm://state/monitors": client.xrandr_query,
                "fvwm://state/windows": self._read_windows,
                "fvwm://state/current-desktop": self._read_current_desktop,
                "fvwm://state/tile-states": self._read_tile_states,
                "fvwm://logs/smart-tile": self._read_smart_tile_log,
            }
        )

        resources: Dict[str, ResourceDefinition] = {}
        for spec in catalog:
            if spec.uri not in readers:
                raise ValueError(f"no reader bound to resource {spec.uri}")
            self._register(resources, ResourceDefinition(spec=spec, reader=readers[spec.uri]))
        self._resources: Mapping[str, ResourceDefinition] = MappingProxyType(resources)

    @staticmethod
    def _register(resources: Dict[str, ResourceDefinition], definition: ResourceDefinition) -> None:
        if definition.uri in resources:
            raise ValueError(f"duplicate resource uri {definition.uri}")
        resources[definition.uri] = definition

    def specs(self) -> Tuple[ResourceSpec, ...]:
        return tuple(definition.spec for definition in self._resources.values())

    def list_resources(self) -> List[Dict[str, str]]:
        return [definition.spec.as_metadata() for definition in self._resources.values()]

    def read_resource(self, uri: str) -> ResourceContents:
        definition = self._resources.get(uri)
        if definition is None:
            raise UnknownIdentifier("resource URI", uri)
        return definition.read()

    # ------------------------------------------------------------------
    # Runtime state readers
    # ------------------------------------------------------------------
    def _read_windows(self) -> str:
        output = self._client.fvwm(WINDOW_LIST_COMMAND).stdout
        windows = [line for line in output.strip().split("\n") if line]
        return json.dumps({"windows": windows}, indent=2)

    def _read_current_desktop(self) -> str:
        output = self._client.fvwm(DESKTOP_STATE_COMMAND).stdout
        return json.dumps({"state": output.strip()}, indent=2)

    def _read_tile_states(self) -> str:
        state_dir = self._settings.tile_state_dir
        try:
            names = self._client.list_dir(state_dir)
        except AdapterFailure as exc:
            if exc.code != "NotFound":
                raise
            names = []
        states = {name: self._client.read_file(state_dir / name).strip() for name in names}
        return json.dumps(states, indent=2)

    def _read_smart_tile_log(self) -> str:
        try:
            return self._client.read_file(self._settings.smart_tile_log)
        except AdapterFailure as exc:
            if exc.code != "NotFound":
                raise
            return "No debug log found"
