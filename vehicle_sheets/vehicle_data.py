"""
Loading and assembling the vehicle makes/models document.

The YAML document has two top-level lists:

    make:
      - id: m1
        name: Toyota
    model:
      - parent_id: m1
        values:
          - id: c1
            name: Corolla

Models are grouped by the id of the make they belong to. Parsing returns the
two lists as they appear in the file; assembly joins them.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple, Union

import yaml
from jsonschema import validate, ValidationError

from .errors import ConfigReadError, ConfigParseError

logger = logging.getLogger(__name__)

_SCALAR = {"type": "string"}

# BaseLoader reads an empty value (`make:`) as "", not null
_EMPTY_OR = {"type": ["array", "string"], "maxLength": 0}

_ENTRY_SCHEMA = {
    "type": "object",
    "properties": {"id": _SCALAR, "name": _SCALAR},
    "required": ["id", "name"]
}

VEHICLE_DOCUMENT_SCHEMA = {
    "type": "object",
    "properties": {
        "make": dict(_EMPTY_OR, items=_ENTRY_SCHEMA),
        "model": dict(
            _EMPTY_OR,
            items={
                "type": "object",
                "properties": {
                    "parent_id": _SCALAR,
                    "values": dict(_EMPTY_OR, items=_ENTRY_SCHEMA)
                },
                "required": ["parent_id"]
            }
        )
    }
}


@dataclass(frozen=True)
class Model:
    id: str
    name: str


@dataclass(frozen=True)
class ModelGroup:
    """Models listed under one make id in the source document."""
    parent_id: str
    values: List[Model] = field(default_factory=list)


@dataclass(frozen=True)
class Make:
    id: str
    name: str
    models: List[Model] = field(default_factory=list)


def _to_model(entry: Dict) -> Model:
    return Model(id=entry["id"], name=entry["name"])


def parse_vehicle_document(raw: Union[bytes, str]) -> Tuple[List[Make], List[ModelGroup]]:
    """
    Decodes a vehicle document into makes and model groups.

    Args:
        raw (bytes | str): The YAML document.

    Returns:
        Tuple[List[Make], List[ModelGroup]]: Makes (without models) and model groups,
                                             both in document order.

    Raises:
        ConfigParseError: If the document is not YAML or does not match the expected shape.
    """
    try:
        # BaseLoader keeps every scalar as written: 007, 1.10 and yes stay strings
        document = yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Error parsing vehicle YAML: {e}") from e

    if document is None or document == "":
        document = {}

    try:
        validate(instance=document, schema=VEHICLE_DOCUMENT_SCHEMA)
    except ValidationError as e:
        raise ConfigParseError(
            f"Vehicle document has an unexpected shape: {e.message} (Path: {list(e.path)})"
        ) from e

    makes = [Make(id=entry["id"], name=entry["name"]) for entry in document.get("make") or []]
    model_groups = [
        ModelGroup(
            parent_id=group["parent_id"],
            values=[_to_model(entry) for entry in group.get("values") or []]
        )
        for group in document.get("model") or []
    ]
    logger.debug(f"Parsed {len(makes)} makes and {len(model_groups)} model groups.")
    return makes, model_groups


def load_vehicle_file(path: str) -> Tuple[List[Make], List[ModelGroup]]:
    """
    Reads and parses the vehicle YAML file at `path`.

    Raises:
        ConfigReadError: If the file cannot be read.
        ConfigParseError: If its content is malformed.
    """
    try:
        with open(path, 'rb') as f:
            raw = f.read()
    except FileNotFoundError as e:
        raise ConfigReadError(f"Vehicle data file not found: {path}") from e
    except OSError as e:
        raise ConfigReadError(f"IOError when trying to read {path}: {e}") from e

    logger.info(f"Loaded vehicle data from {path}")
    return parse_vehicle_document(raw)


def assemble_makes(makes: List[Make], model_groups: List[ModelGroup]) -> List[Make]:
    """
    Attaches each model group to the make it references.

    A later group with the same parent id replaces an earlier one. Groups pointing
    at an unknown make are dropped, and makes without a group get no models.

    Args:
        makes (List[Make]): Makes in document order.
        model_groups (List[ModelGroup]): Model groups in document order.

    Returns:
        List[Make]: New Make objects in the original order, each carrying its models.
    """
    models_by_make: Dict[str, List[Model]] = {}
    for group in model_groups:
        if group.parent_id in models_by_make:
            logger.warning(f"Duplicate model group for make '{group.parent_id}'; the last one wins.")
        models_by_make[group.parent_id] = list(group.values)

    known_ids = {make.id for make in makes}
    for parent_id in models_by_make:
        if parent_id not in known_ids:
            logger.debug(f"Dropping model group for unknown make '{parent_id}'.")

    return [replace(make, models=models_by_make.get(make.id, [])) for make in makes]
