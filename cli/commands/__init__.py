from .commands import argument, command, registry
from .types import FileOrString, wallet_address_or_key
