"""
YAML parameter loader with schema validation.

Loads run parameters from YAML files and validates them against the JSON
schema shipped in wator/schemas/.
"""

import yaml
import json
from pathlib import Path
from typing import Optional
import jsonschema

from .data_types import SimulationParameters, RunConfig


PACKAGE_DIR = Path(__file__).parent
DEFAULT_SCHEMA_PATH = PACKAGE_DIR / "schemas" / "parameters.schema.json"
DEFAULT_PARAMETERS_PATH = PACKAGE_DIR / "data" / "default.yaml"


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")

    if not isinstance(data, dict):
        raise DataLoadError(f"Expected a mapping at top level of {file_path}")

    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    schema_path = Path(schema_path)
    if not schema_path.exists():
        raise DataLoadError(f"Schema not found: {schema_path}")

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(f"Validation error in {data_path}: {e.message}")
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")


def parse_run_config(data: dict, source: str = "<dict>") -> RunConfig:
    """
    Build a RunConfig from an already validated dict.

    Missing parameters fall back to the defaults in constants.py.
    """
    try:
        params = SimulationParameters(**data.get('parameters', {}))
    except (TypeError, ValueError) as e:
        raise DataLoadError(f"Invalid parameters in {source}: {e}")

    return RunConfig(params=params, seed=data.get('seed'))


def load_run_config(
    file_path: Optional[Path] = None,
    schema_path: Optional[Path] = DEFAULT_SCHEMA_PATH
) -> RunConfig:
    """
    Load run parameters (and optional seed) from YAML.

    Args:
        file_path: Parameter file (defaults to the bundled default.yaml)
        schema_path: JSON schema to validate against (None skips validation)

    Returns:
        RunConfig with parameters and seed
    """
    file_path = Path(file_path) if file_path is not None else DEFAULT_PARAMETERS_PATH
    data = load_yaml(file_path)

    if schema_path is not None:
        validate_against_schema(data, schema_path, file_path)

    return parse_run_config(data, source=str(file_path))
