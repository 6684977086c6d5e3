"""bundledeps - Dependency graph validation for multi-module bundles.

bundledeps checks the module dependency graph of an application bundle before it
is built: a single base module, consistent split IDs, no self, duplicate or
dangling dependencies, no cycles, and no install-time module depending on an
on-demand module.
"""

__version__ = "0.1.0"
__author__ = "bundledeps contributors"
__description__ = "Dependency graph validation for multi-module bundles"

from bundledeps.config import BundleDepsConfig
from bundledeps.exceptions import ModuleValidationError
from bundledeps.models import BundleModule
from bundledeps.validation import validate_modules

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "BundleDepsConfig",
    "BundleModule",
    "ModuleValidationError",
    "validate_modules",
]
