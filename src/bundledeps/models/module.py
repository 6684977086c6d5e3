"""Bundle module model."""

from pydantic import BaseModel, ConfigDict, Field

BASE_MODULE_NAME = "base"


class BundleModule(BaseModel):
    """A single module of a bundle as seen by dependency validation.

    Modules are immutable once constructed. ``uses_splits`` keeps the order in
    which dependencies were declared in the module manifest.
    """

    name: str = Field(min_length=1)
    is_base: bool = Field(alias="base", default=False)
    on_demand: bool = Field(alias="onDemand", default=False)
    split_id: str | None = Field(alias="splitId", default=None)
    uses_splits: tuple[str, ...] = Field(alias="usesSplits", default=())

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def is_install_time(self) -> bool:
        """Check if the module is delivered at install time."""
        return not self.on_demand
