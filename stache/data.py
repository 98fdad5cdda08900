"""
Environment loading for the command line.

Data files are YAML; JSON documents load the same way since JSON is a
subset of YAML.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import DataLoadError

_yaml = YAML(typ="safe")


def parse_data(text: str, source: str = "<data>") -> Dict[str, Any]:
    """
    Decodes a YAML/JSON document into an environment mapping.

    An empty document gives an empty environment.

    Raises:
        DataLoadError: invalid YAML or a top level that is not a mapping
    """
    try:
        data = _yaml.load(text)
    except YAMLError as e:
        raise DataLoadError(f"Failed to parse {source}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataLoadError(f"{source}: top level must be a mapping, got {type(data).__name__}")
    return data


def load_data(path: Optional[str]) -> Dict[str, Any]:
    """
    Reads an environment from a file, or from stdin for "-".

    Args:
        path: File path, "-" or None (empty environment)
    """
    if not path:
        return {}

    if path == "-":
        return parse_data(sys.stdin.read(), "<stdin>")

    file_path = Path(path)
    if not file_path.is_file():
        raise DataLoadError(f"Data file not found: {file_path}")
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataLoadError(f"Failed to read data file {file_path}: {e}")
    return parse_data(text, str(file_path))


def apply_overrides(data: Dict[str, Any], assignments: Optional[List[str]]) -> Dict[str, Any]:
    """
    Applies KEY=VALUE overrides to a copy of `data`.

    KEY may be dotted (a.b.c) to reach nested mappings, which are created
    as needed. VALUE is decoded as a YAML scalar, so `3`, `true` and
    `"text"` keep their types.
    """
    result = dict(data)
    for assignment in assignments or []:
        if "=" not in assignment:
            raise DataLoadError(f"Invalid override '{assignment}'. Expected 'key=value'")
        key, raw = assignment.split("=", 1)
        key = key.strip()
        if not key:
            raise DataLoadError(f"Invalid override '{assignment}': empty key")

        try:
            value = _yaml.load(raw) if raw.strip() else ""
        except YAMLError:
            value = raw

        *parents, leaf = key.split(".")
        target = result
        for part in parents:
            child = target.get(part)
            child = dict(child) if isinstance(child, dict) else {}
            target[part] = child
            target = child
        target[leaf] = value
    return result


__all__ = ["parse_data", "load_data", "apply_overrides"]
