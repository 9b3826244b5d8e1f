"""
Protocol Renderer : interface pluggable des backends de rendu (aperçu, export…).
"""
from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Renderer(Protocol):
    def render_template(self, path: str, variables: Mapping[str, Any]) -> str: ...
