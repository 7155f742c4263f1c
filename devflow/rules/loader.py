import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from devflow.rules.models import Rules

DEFAULT_RULES_PATH = Path(__file__).parent / "default_rules.yaml"


def load_rules(path: Path = DEFAULT_RULES_PATH) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e


def missing_required_env(rules: Rules) -> list[str]:
    """Names listed in ``ops.required_env`` that are unset."""
    return [name for name in rules.ops.required_env if name not in os.environ]
