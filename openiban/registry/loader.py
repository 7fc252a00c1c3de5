"""Load country definitions from a YAML file.

File format:

    countries:
      - code: NL
        name: Netherlands
        length: 18
        pattern: 4!a10!n
        example: NL91ABNA0417164300

The file only supplies definitions; compiling them (and rejecting broken
patterns or duplicates) is the registry's job.
"""

from pathlib import Path

import yaml
from pydantic import TypeAdapter, ValidationError

from ..exceptions import ConfigurationError
from ..utils.logging import get_logger
from .countries import CountryDefinition

logger = get_logger(__name__)

_DEFINITIONS_ADAPTER = TypeAdapter(list[CountryDefinition])


def parse_definitions(data: object, *, source: str = "<data>") -> list[CountryDefinition]:
    """Validate already-parsed YAML/JSON data into country definitions.

    Raises:
        ConfigurationError: Data is not a mapping with a ``countries`` list of valid entries
    """
    if not isinstance(data, dict) or "countries" not in data:
        raise ConfigurationError(
            f"{source}: expected a mapping with a 'countries' list",
            setting="registry_file",
            expected="countries: [...]",
        )

    try:
        return _DEFINITIONS_ADAPTER.validate_python(data["countries"])
    except ValidationError as e:
        raise ConfigurationError(
            f"{source}: invalid country definitions",
            setting="registry_file",
            context={"error_count": e.error_count()},
            original_error=e,
        ) from e


def load_definitions(path: Path | str) -> list[CountryDefinition]:
    """Read country definitions from a YAML file.

    Raises:
        ConfigurationError: File missing, unreadable, not YAML, or not valid definitions
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read country definitions from {path}",
            setting="registry_file",
            original_error=e,
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"{path} is not valid YAML",
            setting="registry_file",
            original_error=e,
        ) from e

    definitions = parse_definitions(data, source=str(path))
    logger.info("iban_registry_file_loaded", path=str(path), country_count=len(definitions))
    return definitions
