"""Pydantic data models for bundle modules and descriptors."""

from bundledeps.models.bundle import BundleDescriptor, ModuleEntry, load_bundle
from bundledeps.models.module import BASE_MODULE_NAME, BundleModule

__all__ = [
    "BASE_MODULE_NAME",
    "BundleModule",
    "BundleDescriptor",
    "ModuleEntry",
    "load_bundle",
]
