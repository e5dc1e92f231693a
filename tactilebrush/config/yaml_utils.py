"""YAML loading with duplicate-key validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, TextIO

import yaml


class UniqueKeyLoader(yaml.SafeLoader):
    """Safe YAML loader that rejects duplicate mapping keys.

    A stroke list with two ``duration:`` entries would otherwise silently
    keep the last one.
    """


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.MappingNode, deep: bool = False) -> dict:
    loader.flatten_mapping(node)
    mapping = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            line = key_node.start_mark.line + 1
            raise ValueError(f"Duplicate key '{key}' detected in YAML (line {line}).")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def load_yaml(stream: TextIO | str) -> Any:
    """Load YAML text or a file-like object.

    Raises:
        ValueError: If a mapping repeats a key.
        yaml.YAMLError: If the document is not valid YAML.
    """
    return yaml.load(stream, Loader=UniqueKeyLoader)


def load_yaml_file(path: str | Path) -> Any:
    """Load a YAML file from disk.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return load_yaml(f)


def dump_yaml(data: Any) -> str:
    """Serialise plain data to block-style YAML, keeping key order."""
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
