"""lade error hierarchy: public re-export surface.

Hierarchy::

    LadeError
    ├── ConfigError                (config.py)
    │   ├── RuleFileError
    │   ├── InvalidPatternError
    │   └── SettingsError
    ├── RoutingError               (hydration.py)
    │   ├── NoProviderError
    │   └── InvalidReferenceError
    ├── BackendError
    │   └── BackendUnavailableError
    ├── SecretNotFoundError
    └── OutputFileError
"""

from lade.errors.base import LadeError
from lade.errors.config import (
    ConfigError,
    InvalidPatternError,
    RuleFileError,
    SettingsError,
)
from lade.errors.hydration import (
    BackendError,
    BackendUnavailableError,
    InvalidReferenceError,
    NoProviderError,
    OutputFileError,
    RoutingError,
    SecretNotFoundError,
)

__all__ = [
    "BackendError",
    "BackendUnavailableError",
    "ConfigError",
    "InvalidPatternError",
    "InvalidReferenceError",
    "LadeError",
    "NoProviderError",
    "OutputFileError",
    "RoutingError",
    "RuleFileError",
    "SecretNotFoundError",
    "SettingsError",
]
