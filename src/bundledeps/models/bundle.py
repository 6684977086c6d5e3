"""Bundle descriptor models and loading.

A bundle descriptor is the JSON form of already-parsed module manifests::

    {
      "bundle": "app",
      "modules": [
        {"name": "base"},
        {"name": "feature", "onDemand": true, "usesSplits": ["camera"]}
      ]
    }
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import BundleLoadError
from .module import BASE_MODULE_NAME, BundleModule

logger = logging.getLogger(__name__)


class ModuleEntry(BaseModel):
    """Module entry of a bundle descriptor."""
    name: str = Field(min_length=1)
    base: bool | None = None
    on_demand: bool = Field(alias="onDemand", default=False)
    split_id: str | None = Field(alias="splitId", default=None)
    uses_splits: list[str] = Field(alias="usesSplits", default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_module(self, base_module_name: str = BASE_MODULE_NAME) -> BundleModule:
        """Convert to a BundleModule.

        When ``base`` is not given explicitly, the module is the base module
        iff its name equals ``base_module_name``.
        """
        is_base = self.base if self.base is not None else self.name == base_module_name
        return BundleModule(
            name=self.name,
            is_base=is_base,
            on_demand=self.on_demand,
            split_id=self.split_id,
            uses_splits=tuple(self.uses_splits),
        )


class BundleDescriptor(BaseModel):
    """Parsed bundle descriptor."""
    bundle: str | None = None
    modules: list[ModuleEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def to_modules(self, base_module_name: str = BASE_MODULE_NAME) -> tuple[BundleModule, ...]:
        """Convert all entries to modules, keeping descriptor order."""
        return tuple(entry.to_module(base_module_name) for entry in self.modules)


def load_bundle(path: str | Path) -> BundleDescriptor:
    """Load a bundle descriptor from a JSON file.

    Args:
        path: Path to the descriptor file

    Returns:
        BundleDescriptor: Parsed descriptor

    Raises:
        BundleLoadError: If the file is missing, not JSON, or not a valid descriptor
    """
    path = Path(path)
    if not path.is_file():
        raise BundleLoadError(f"Bundle descriptor not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise BundleLoadError(f"Invalid JSON in bundle descriptor {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise BundleLoadError(f"Bundle descriptor {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise BundleLoadError(f"Cannot read bundle descriptor {path}: {e}") from e

    try:
        descriptor = BundleDescriptor.model_validate(data)
    except ValidationError as e:
        raise BundleLoadError(f"Invalid bundle descriptor {path}: {e}") from e

    logger.debug(f"Loaded {len(descriptor.modules)} modules from {path}")
    return descriptor
