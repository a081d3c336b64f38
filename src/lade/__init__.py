"""
lade – load secrets into your shell just before a matching command runs.

Import path convention::

    from lade.rules import Config, build_config
    from lade.sdk import hydrate, hydrate_one
    from lade.errors import LadeError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
