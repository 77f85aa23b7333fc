from dataclasses import dataclass
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount


@dataclass
class Wallet:
    address: str
    account: Optional[LocalAccount] = None

    @classmethod
    def from_private_key(cls, private_key):
        a = Account.from_key(private_key)
        return cls(a.address, a)

    @property
    def read_only(self) -> bool:
        return self.account is None

    def __str__(self) -> str:
        return f'Wallet({self.address})'
