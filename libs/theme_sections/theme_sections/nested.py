"""Accès aux champs de config par chemin pointé ("placeholder.title")."""
from typing import Any, Mapping, MutableMapping

MISSING = object()


def get_nested_value(data: Any, path: str, default: Any = MISSING) -> Any:
    node = data
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return default
        node = node[part]
    return node


def set_nested_value(data: MutableMapping, path: str, value: Any) -> None:
    """Crée les dicts intermédiaires ; remplace un intermédiaire qui n'est pas un dict."""
    parts = path.split(".")
    node = data
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, MutableMapping):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def deep_merge(base: Mapping, override: Mapping) -> dict:
    """Fusion récursive : les dicts se combinent, le reste est remplacé."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
