"""SDK providers – one backend per reference scheme, Raw last."""
from lade.sdk.providers.base import Provider, UriProvider, group_by
from lade.sdk.providers.doppler import Doppler
from lade.sdk.providers.file import File
from lade.sdk.providers.infisical import Infisical
from lade.sdk.providers.onepassword import BATCH_DELIMITER, OnePassword
from lade.sdk.providers.passbolt import Passbolt
from lade.sdk.providers.raw import Raw
from lade.sdk.providers.vault import Vault


def default_providers() -> list[Provider]:
    """Fresh provider instances in routing priority order."""
    return [Doppler(), Infisical(), OnePassword(), Vault(), Passbolt(), File(), Raw()]


__all__ = [
    "BATCH_DELIMITER",
    "Doppler",
    "File",
    "Infisical",
    "OnePassword",
    "Passbolt",
    "Provider",
    "Raw",
    "UriProvider",
    "Vault",
    "default_providers",
    "group_by",
]
