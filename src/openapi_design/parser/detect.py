"""Detect the kind of API description held in a decoded document."""

import json
from pathlib import Path

import yaml


def decode_text(text: str, suffix: str = "") -> object:
    """Decode document text as JSON or YAML.

    JSON is tried first for ``.json`` files; YAML is a superset of JSON,
    so it handles everything else.
    """
    if suffix.lower() == ".json":
        try:
            return json.loads(text)
        except (json.JSONDecodeError, ValueError):
            pass
    return yaml.safe_load(text)


def detect_version(data: object) -> str:
    """Classify a decoded document.

    Returns: 'openapi3', 'swagger2', or 'unknown'.
    """
    if not isinstance(data, dict):
        return "unknown"
    if "openapi" in data and str(data["openapi"]).startswith("3"):
        return "openapi3"
    if "swagger" in data:
        return "swagger2"
    return "unknown"


def detect_file(file_path: Path) -> str:
    """Classify a document file without validating it."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = decode_text(text, file_path.suffix)
    except yaml.YAMLError:
        return "unknown"
    return detect_version(data)
