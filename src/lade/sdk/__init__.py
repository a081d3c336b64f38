"""SDK – reference routing, batching and concurrent resolution."""
from lade.sdk.engine import Resolution, ResolutionState, join_all
from lade.sdk.hydrate import hydrate, hydrate_one
from lade.sdk.interpolation import resolve, resolve_one
from lade.sdk.router import ProviderRouter
from lade.sdk.types import Hydration
from lade.sdk.uri import SecretUri, scheme_of

__all__ = [
    "Hydration",
    "ProviderRouter",
    "Resolution",
    "ResolutionState",
    "SecretUri",
    "hydrate",
    "hydrate_one",
    "join_all",
    "resolve",
    "resolve_one",
    "scheme_of",
]
