"""
Validation of merged pipeline configuration against the bundled JSON schema.
"""
import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Any, Tuple, Optional

from jsonschema import Draft7Validator

CONFIG_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "pipeline_config.schema.json"


@lru_cache(maxsize=4)
def _config_validator(schema_path: Path) -> Draft7Validator:
    with open(schema_path, 'r', encoding='utf-8') as f:
        schema = json.load(f)
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def validate_pipeline_config(config_data: Dict[str, Any], schema_path: Path = CONFIG_SCHEMA_PATH) -> Tuple[bool, Optional[str]]:
    """
    Check a merged configuration dictionary.

    All violations are reported, ordered by their location in the document.

    Returns:
        Tuple of (is_valid, error_message)
    """
    validator = _config_validator(Path(schema_path))
    problems = sorted(validator.iter_errors(config_data), key=lambda e: [str(p) for p in e.absolute_path])
    if not problems:
        return True, None

    messages = []
    for problem in problems:
        location = "/".join(str(part) for part in problem.absolute_path) or "<root>"
        messages.append(f"{location}: {problem.message}")
    return False, "; ".join(messages)
