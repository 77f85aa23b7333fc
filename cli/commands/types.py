from pathlib import Path

from web3 import Web3

from ..types import Wallet


class FileOrString(str):
    def __new__(cls, content):
        if content:
            f = Path(content)
            if f.is_file():
                return str.__new__(cls, f.read_text().strip())
        return str.__new__(cls, content)


def wallet_address_or_key(value: str) -> Wallet:
    """
    Address only (read-only) or private key (signer), value or path to file with value

    >>> wallet_address_or_key('0xbad43dfb19C6Ab77D9eC30704b89879F1e6d3081')
    Wallet(address='0xbad43dfb19C6Ab77D9eC30704b89879F1e6d3081', account=None)
    """
    val = FileOrString(value)
    if Web3.is_address(val):
        return Wallet(val)
    return Wallet.from_private_key(val)
