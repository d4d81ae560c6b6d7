"""
Registry of known APIs loaded from YAML.

Each entry carries the metadata used to create the API node in the store
and the documentation link table used by the normalizer.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from errata.errors import NotFoundError
from errata.models.store import APIDefinition

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PATH = Path(__file__).resolve().parent.parent / "data" / "apis.yaml"


class APIRegistry:
    """Lookup table of API definitions keyed by case-insensitive name."""

    def __init__(self, definitions: List[APIDefinition]):
        self._definitions: Dict[str, APIDefinition] = {}
        for definition in definitions:
            key = definition.name.lower()
            if key in self._definitions:
                logger.warning(f"API '{definition.name}' already registered, overwriting")
            self._definitions[key] = definition

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "APIRegistry":
        """
        Load a registry from a YAML file.

        Args:
            path: File with a top-level ``apis`` list

        Returns:
            APIRegistry instance

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file has no ``apis`` list
            yaml.YAMLError: If the file is malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"API registry not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse API registry {path}: {e}")
            raise

        entries = config.get("apis")
        if not isinstance(entries, list):
            raise ValueError(f"Missing 'apis' list in {path}")

        definitions = [APIDefinition(**entry) for entry in entries]
        logger.info(f"Loaded {len(definitions)} API definitions from {path}")
        return cls(definitions)

    def get(self, name: str) -> APIDefinition:
        """
        Get the definition for an API.

        Raises:
            NotFoundError: If the API is not registered
        """
        definition = self._definitions.get(name.lower())
        if definition is None:
            raise NotFoundError(f"API '{name}' is not registered")
        return definition

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._definitions

    @property
    def names(self) -> List[str]:
        return [d.name for d in self._definitions.values()]

    @property
    def active_names(self) -> List[str]:
        return [d.name for d in self._definitions.values() if d.active]


_registry: Optional[APIRegistry] = None


def get_api_registry() -> APIRegistry:
    """
    Get or create the global API registry.

    Uses ``settings.api_registry_path`` when set, the packaged apis.yaml
    otherwise.
    """
    global _registry
    if _registry is None:
        from errata.config import settings
        path = settings.api_registry_path or DEFAULT_REGISTRY_PATH
        _registry = APIRegistry.from_yaml(path)
    return _registry
