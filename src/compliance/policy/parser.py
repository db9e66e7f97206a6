"""
Operations file parser.

Parses YAML or JSON files of policy operations into EvaluationRequest
objects.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from compliance.exceptions import OperationParseError
from compliance.policy.models import EvaluationRequest


def load_requests(path: str | Path) -> list[EvaluationRequest]:
    """
    Load evaluation requests from a YAML or JSON file.

    Args:
        path: Path to operations file

    Returns:
        List of parsed requests, in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        OperationParseError: If file contains invalid operations
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Operations file not found: {path}")

    with open(path) as f:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise OperationParseError(f"Cannot parse {path}: {e}") from e

    if data is None:
        return []

    return parse_requests(data)


def parse_requests(data: Any) -> list[EvaluationRequest]:
    """
    Parse requests from a list of operations or an 'operations' mapping.

    Args:
        data: Parsed document

    Returns:
        List of EvaluationRequest objects
    """
    if isinstance(data, dict):
        data = data.get("operations", [])

    if not isinstance(data, list):
        raise OperationParseError("'operations' must be a list")

    requests = []
    for i, operation in enumerate(data):
        try:
            requests.append(parse_operation(operation))
        except OperationParseError as e:
            raise OperationParseError(f"Error parsing operation {i}: {e}") from e

    return requests


def parse_operation(data: Any) -> EvaluationRequest:
    """
    Parse a single operation from dictionary.

    Payload contents are left for the checker to validate.
    """
    if not isinstance(data, dict):
        raise OperationParseError("Operation must be a dictionary")

    code = data.get("code")
    if code is None:
        raise OperationParseError("Operation must have 'code' field")
    if not isinstance(code, str):
        raise OperationParseError(f"Invalid code: {code!r}")

    enabled = data.get("enabled", False)
    if not isinstance(enabled, bool):
        raise OperationParseError(f"'enabled' must be a boolean, got {enabled!r}")

    payload = data.get("payload")
    if payload is not None and not isinstance(payload, (dict, str)):
        raise OperationParseError("'payload' must be a mapping or a JSON string")

    return EvaluationRequest.from_dict(
        {"code": code, "enabled": enabled, "payload": payload}
    )
