import argparse
import json
import logging
from functools import cached_property
from typing import Optional, Union

from colorama import Fore
from web3.exceptions import ContractLogicError

from serialmint import abi, authority, connect
from serialmint.errors import InvalidAddress, UnauthorizedOperation
from serialmint.factory import ABI

from . import commands
from .types import Wallet

logger = logging.getLogger(__name__)


class CLI:
    def __init__(self, wallet: Optional[Wallet], web3_provider: str, args: argparse.Namespace):
        """
        :param wallet: address (read-only) or private key of the sender, None for read-only without sender
        :param web3_provider: web3 http endpoint
        :param args: original argparse Namespace
        """
        self.args = args
        self.wallet = wallet
        self.web3_provider = web3_provider

    @cached_property
    def authority(self) -> Union[authority.Provider, authority.Signer]:
        if self.wallet is None or self.wallet.read_only:
            return authority.Provider.from_rpc(self.web3_provider)
        return authority.Signer(
            authority.web3_from_rpc(self.web3_provider),
            self.wallet.account,
            max_fee=self.args.max_fee,
            priority_fee=self.args.priority_fee,
        )

    def _color(self, text, color):
        if self.args.no_colors:
            return text
        return f'{color}{text}{Fore.RESET}'

    def _mint(self, function_name, *args):
        handle = connect(self.args.contract, self.authority)
        if self.args.preview:
            r = getattr(handle, function_name)(*args, preview=True)
            print(f'{function_name} would return {r}')
        elif self.args.estimate:
            r = getattr(handle, function_name)(*args, estimate_only=True)
            print(f'{function_name} gas estimate: {r["gasUsed"]} (gas price {r["effectiveGasPrice"]})')
        elif self.args.no_wait:
            r = getattr(handle, function_name)(*args, wait_for_transaction_receipt=False)
            print(f'{function_name} sent: {r.hex()}')
        else:
            r = getattr(handle, function_name)(*args)
            if r.get('status') == 1:
                print(self._color(f'{function_name} mined in block {r["blockNumber"]}', Fore.GREEN))
            else:
                print(self._color(f'{function_name} FAILED: {r}', Fore.RED))
        return r

    @commands.command()
    @commands.argument('contract', metavar='CONTRACT', help='Address of the contract implementing ISerialMultipleMintable')
    @commands.argument('serial_id', type=int, metavar='SERIAL_ID')
    @commands.argument('to', metavar='ADDRESS', help='Recipient')
    @commands.argument('--preview', action='store_true', help='Static call only, print returned value')
    @commands.argument('--estimate', action='store_true', help='Only estimate gas')
    @commands.argument('--no-wait', action='store_true', help='Do not wait for transaction receipt')
    def cmd_mint_serial(self):
        """Mint a serial to one address"""
        return self._mint('mintSerial', self.args.serial_id, self.args.to)

    @commands.command()
    @commands.argument('contract', metavar='CONTRACT', help='Address of the contract implementing ISerialMultipleMintable')
    @commands.argument('serial_id', type=int, metavar='SERIAL_ID')
    @commands.argument('to', metavar='ADDRESS', nargs='+', help='Recipients (order is kept)')
    @commands.argument('--preview', action='store_true', help='Static call only, print returned value')
    @commands.argument('--estimate', action='store_true', help='Only estimate gas')
    @commands.argument('--no-wait', action='store_true', help='Do not wait for transaction receipt')
    def cmd_mint_serials(self):
        """Mint a serial to multiple addresses in one transaction"""
        return self._mint('mintSerials', self.args.serial_id, self.args.to)

    @commands.command()
    @commands.argument('-s', '--signatures', action='store_true', help='List selector and signature per function')
    def cmd_abi(self):
        """Print the ISerialMultipleMintable ABI"""
        if not self.args.signatures:
            print(json.dumps(ABI, indent=2))
            return ABI
        r = []
        for function in ABI:
            line = f'{abi.selector(function)} {abi.signature(function)} {function["stateMutability"]}'
            print(line)
            r.append(line)
        return r

    def run(self):
        try:
            return getattr(self, f'cmd_{self.args.cmd}')()
        except (InvalidAddress, UnauthorizedOperation) as e:
            logger.error(str(e))
        except ContractLogicError as e:
            logger.error('reverted: %s', e)
        return False
