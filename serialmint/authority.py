import logging
from functools import cached_property
from typing import Any, Optional, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from .decorators import cached_property_with_ttl
from .errors import UnauthorizedOperation

GWEI_DECIMALS = 1000000000
DEFAULT_RECEIPT_TIMEOUT = 120

logger = logging.getLogger(__name__)


def function_name(function_call: Any) -> str:
    return getattr(function_call, 'fn_name', None) or str(function_call.abi_element_identifier)


def web3_from_rpc(web3_provider: str, web3_provider_class: Any = None) -> Web3:
    if web3_provider_class is None:
        web3_provider_class = Web3.HTTPProvider
    web3 = Web3(web3_provider_class(web3_provider))
    # POA chains (such as Avalanche C-Chain) have extraData longer than 32 bytes
    web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return web3


class Provider:
    """Read-only connection: queries and static calls, never submits transactions"""

    def __init__(self, web3: Web3):
        self.web3 = web3

    @classmethod
    def from_rpc(cls, web3_provider: str, web3_provider_class: Any = None, **kwargs):
        return cls(web3_from_rpc(web3_provider, web3_provider_class=web3_provider_class), **kwargs)

    @property
    def address(self) -> Optional[str]:
        return None

    def call(self, function_call: Any):
        return function_call.call()

    def transact(self, function_call: Any, **kwargs):
        raise UnauthorizedOperation(function_name(function_call))

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.web3.provider!r})'


class Signer(Provider):
    """
    Connection plus a local account, able to build, sign and send transactions

    :param max_fee: upper limit for maxFeePerGas, in gwei (no limit if None)
    :param priority_fee: percentage added on top of current gas price to compute maxFeePerGas
    """

    def __init__(
        self,
        web3: Web3,
        account: LocalAccount,
        max_fee: Optional[float] = None,
        priority_fee: Optional[float] = None,
    ):
        super().__init__(web3)
        self.account = account
        self._max_fee = max_fee
        self._priority_fee = priority_fee

    @classmethod
    def from_private_key(cls, web3_provider: str, private_key: str, web3_provider_class: Any = None, **kwargs):
        return cls.from_rpc(
            web3_provider,
            web3_provider_class=web3_provider_class,
            account=Account.from_key(private_key),
            **kwargs,
        )

    @property
    def address(self) -> str:
        return self.account.address

    @cached_property
    def chain_id(self):
        return self.web3.eth.chain_id

    @cached_property_with_ttl(60)
    def gas_price(self):
        r = self.web3.eth.gas_price
        logger.debug('Gas price: %d', r)
        return r

    def fees(self, priority_fee: Optional[float] = None) -> dict:
        if priority_fee is None:
            priority_fee = self._priority_fee or 0
        mf = int(self.gas_price * (100 + priority_fee) / 100)
        if self._max_fee is not None:
            max_fee = int(self._max_fee * GWEI_DECIMALS)
            if mf > max_fee:
                logger.error('Required max fee of %d exceeds allowed max fee of %d', mf, max_fee)
                mf = max_fee
        return {
            'maxFeePerGas': mf,
            'maxPriorityFeePerGas': min(self.web3.eth.max_priority_fee, mf),
        }

    def call(self, function_call: Any):
        return function_call.call({'from': self.address})

    def transact(
        self,
        function_call: Any,
        wait_for_transaction_receipt: Union[bool, float] = None,
        estimate_only=False,
        priority_fee=None,
    ):
        """build tx, sign it and send it"""
        nonce = self.web3.eth.get_transaction_count(self.address)
        tx = function_call.build_transaction({'nonce': nonce, 'from': self.address, 'chainId': self.chain_id})
        tx.update(self.fees(priority_fee=priority_fee))
        logger.debug('%s transaction: %s', function_name(function_call), tx)

        if estimate_only:
            gas = self.web3.eth.estimate_gas(tx)
            return {'gasUsed': gas, 'effectiveGasPrice': self.gas_price}

        signed_txn = self.account.sign_transaction(tx)
        tx_hash = self.web3.eth.send_raw_transaction(signed_txn.raw_transaction)
        logger.info('%s sent: %s', function_name(function_call), tx_hash.hex())

        if wait_for_transaction_receipt is False:
            return tx_hash
        return self.web3.eth.wait_for_transaction_receipt(
            tx_hash,
            # if wait_for_transaction_receipt is None, use default
            timeout=wait_for_transaction_receipt or DEFAULT_RECEIPT_TIMEOUT,
        )

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.address})'
