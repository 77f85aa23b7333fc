"""
Typed binding for the ISerialMultipleMintable contract interface

>>> from web3 import Web3
>>> handle = connect('0x' + '11' * 20, Web3())
>>> handle.address
'0x1111111111111111111111111111111111111111'
>>> connect('0x1234', Web3())
Traceback (most recent call last):
...
web3.exceptions.InvalidAddress: '0x1234' is not a valid address
"""
from typing import Any, Sequence, Union

from web3 import Web3

from . import abi, contracts
from .authority import Provider, Signer
from .errors import InvalidAddress

ABI = abi.validate_abi(contracts.i_serial_multiple_mintable.ABI)

SignerOrProvider = Union[Signer, Provider, Web3]


class ISerialMultipleMintable:
    """
    Handle over a deployed contract implementing ISerialMultipleMintable

    Every function accepts these keyword options on top of the contract arguments:
    :param preview: static call (eth_call) returning the decoded output instead of submitting
    :param wait_for_transaction_receipt: False to return the hash right away, or receipt timeout in seconds
    :param estimate_only: only estimate gas
    :param priority_fee: percentage on top of current gas price, for this transaction only
    """

    abi = ABI

    def __init__(self, address: str, signer_or_provider: Union[Signer, Provider], contract: Any):
        self.address = address
        self.signer_or_provider = signer_or_provider
        self._contract = contract

    def mintSerial(self, serialId: int, to: str, **kwargs):
        return self._invoke('mintSerial', serialId, to, **kwargs)

    def mintSerials(self, serialId: int, to: Sequence[str], **kwargs):
        return self._invoke('mintSerials', serialId, to, **kwargs)

    def _invoke(self, name: str, *args, preview=False, **kwargs):
        function_call = getattr(self._contract.functions, name)(*args)
        if preview or not abi.is_state_changing(abi.function_abi(self.abi, name)):
            return self.signer_or_provider.call(function_call)
        return self.signer_or_provider.transact(function_call, **kwargs)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.address}, {self.signer_or_provider!r})'


abi.check_interface(ISerialMultipleMintable, ABI)


def _is_mixed_case(address) -> bool:
    """
    Mixed-case hex strings carry an EIP-55 checksum

    >>> _is_mixed_case('0xbad43dfb19C6Ab77D9eC30704b89879F1e6d3081')
    True
    >>> _is_mixed_case('0xABCDEFABCDEFABCDEFABCDEFABCDEFABCDEFABCD')
    False
    >>> _is_mixed_case(bytes(20))
    False
    """
    if not isinstance(address, str):
        return False
    hex_part = address[2:] if address[:2].lower() == '0x' else address
    return hex_part != hex_part.lower() and hex_part != hex_part.upper()


def connect(address: Union[str, bytes], signer_or_provider: SignerOrProvider) -> ISerialMultipleMintable:
    """
    Bind the interface to `address`, no network calls are made

    A plain Web3 instance is used as a read-only Provider.
    """
    if isinstance(signer_or_provider, Web3):
        signer_or_provider = Provider(signer_or_provider)
    elif not isinstance(signer_or_provider, Provider):
        raise TypeError(f'expected Signer, Provider or Web3, got {type(signer_or_provider).__name__}')
    if not Web3.is_address(address) or (_is_mixed_case(address) and not Web3.is_checksum_address(address)):
        raise InvalidAddress(f'{address!r} is not a valid address')
    contract = signer_or_provider.web3.eth.contract(address=Web3.to_checksum_address(address), abi=ABI)
    return ISerialMultipleMintable(address, signer_or_provider, contract)


bind = connect


class ISerialMultipleMintableFactory:
    abi = ABI
    connect = staticmethod(connect)
