"""
Document loader utility for SwiftCamp.

Loads structured content documents (YAML or JSON) from disk.
"""

import json
from pathlib import Path
from typing import Any

import yaml


YAML_SUFFIXES = {".yaml", ".yml"}


def load_document(path: str | Path) -> Any:
    """
    Load a structured document.

    Args:
        path: Path to a .yaml/.yml or .json file

    Returns:
        The parsed document (usually a list or dict)

    Raises:
        FileNotFoundError: If the document doesn't exist
        yaml.YAMLError: If YAML parsing fails
        json.JSONDecodeError: If JSON parsing fails
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"Content document not found: {file_path}")

    with open(file_path, "r", encoding="utf-8-sig") as f:
        if file_path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(f)
        return json.load(f)
