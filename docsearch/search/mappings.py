"""Load index mapping definitions by resource name."""

import logging
from importlib import resources
from importlib.resources.abc import Traversable
from os import PathLike
from pathlib import Path
from typing import Any

import orjson

from docsearch.exceptions import MappingResourceError

logger = logging.getLogger(__name__)


def _locate(resource: str | PathLike, package: str | None) -> Traversable | Path:
    if package is None:
        return Path(resource)
    try:
        return resources.files(package).joinpath(str(resource))
    except ModuleNotFoundError as e:
        raise MappingResourceError(f"Mapping package {package} not found") from e


def load_mapping(resource: str | PathLike, package: str | None = None) -> dict[str, Any]:
    """Read a mapping definition.

    Without `package` the resource is a filesystem path, otherwise it is
    resolved inside that package's data files.

    Raises:
        MappingResourceError: If the resource is missing or not a JSON object.
    """
    location = _locate(resource, package)
    if not location.is_file():
        raise MappingResourceError(f"Mapping resource {resource} not found")

    try:
        mapping = orjson.loads(location.read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        raise MappingResourceError(f"Mapping resource {resource} is not valid JSON: {e}") from e

    if not isinstance(mapping, dict):
        raise MappingResourceError(f"Mapping resource {resource} must be a JSON object")

    logger.debug("Loaded mapping resource", extra={"resource": str(resource)})
    return mapping


def split_index_body(definition: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any] | None]:
    """Split a definition into (mappings, settings).

    A bare mapping (e.g. `{"properties": {...}}`) has no settings. A full index
    body with a top level `mappings` key may also carry `settings`.
    """
    if "mappings" in definition:
        return definition["mappings"] or {}, definition.get("settings")
    return definition, None
