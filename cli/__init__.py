#!/usr/bin/env python

import logging

import configargparse
from colorama import Fore

from . import cli, commands

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')
logger = logging.getLogger(__name__)


def build_parser():
    parser = configargparse.ArgParser(
        prog=__name__,
        auto_env_var_prefix='serialmint_',
        default_config_files=['~/.serialmint.conf'],
        args_for_writing_out_config_file=['--output-config'],
        formatter_class=configargparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('-c', '--config', is_config_file_arg=True, help='config file path')
    parser.add_argument(
        '--wallet',
        metavar='ADDRESS_OR_PRIVATE_KEY',
        type=commands.wallet_address_or_key,
        help='wallet address (or private key) - if only address, or none, transactions are not possible (value or path to file with value)',
    )
    parser.add_argument(
        '--web3-rpc',
        type=commands.FileOrString,
        default='http://127.0.0.1:8545',
        help='web3 http endpoint (value or path to file with value)',
    )
    parser.add_argument('--max-fee', type=float, help='Upper limit for max fee per gas, in gwei')
    parser.add_argument(
        '--priority-fee',
        type=float,
        default=0,
        help='Percentage added on top of current gas price to compute max fee per gas',
    )
    parser.add_argument('--debug', action='store_true', help='Debug verbosity')
    parser.add_argument('--no-colors', action='store_true', help='Disable colors in output')

    subparsers = parser.add_subparsers(title='commands', dest='cmd')

    for k, v in commands.registry.items():
        pm = subparsers.add_parser(k, help=v.help)
        for a in v.arguments:
            pm.add_argument(*a[0], **a[1])

    return parser


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    if not args.cmd:
        p.error('choose a command')

    if not args.no_colors:
        logging.addLevelName(logging.WARNING, f'{Fore.YELLOW}{logging.getLevelName(logging.WARNING)}{Fore.RESET}')
        logging.addLevelName(logging.ERROR, f'{Fore.RED}{logging.getLevelName(logging.ERROR)}{Fore.RESET}')
        logging.addLevelName(logging.DEBUG, f'{Fore.LIGHTRED_EX}{logging.getLevelName(logging.DEBUG)}{Fore.RESET}')

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug('debug enabled')

    c = cli.CLI(args.wallet, args.web3_rpc, args)
    if c.run() is False:
        return 1
    return 0


if __name__ == '__main__':
    exit(main() or 0)
