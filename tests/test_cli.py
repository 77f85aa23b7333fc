import contextlib
import io
import json
import tempfile
from pathlib import Path
from unittest import TestCase, mock

import cli
from cli import commands, types
from serialmint import authority
from serialmint.factory import ABI

TEST_WALLET = '0xbad43dfb19C6Ab77D9eC30704b89879F1e6d3081'
TEST_WALLET_PKEY = 'bacc489be509e5463399feb27097af41580344053c7e62c70d1d2a2291d032e0'
TEST_WALLET_WALLET = types.Wallet.from_private_key(TEST_WALLET_PKEY)
TEST_CONTRACT = '0xabcdefabcdefabcdefabcdefabcdefabcdefabcd'
TEST_OTHER = '0x1111111111111111111111111111111111111111'
# nothing listens here, any network call would fail
OFFLINE_RPC = 'http://127.0.0.1:9'


class TestParser(TestCase):
    def parse(self, argv):
        return cli.build_parser().parse_args(argv, config_file_contents='')

    def test_mint_serial(self):
        args = self.parse(['mint_serial', TEST_CONTRACT, '10', TEST_OTHER])
        self.assertEqual(args.cmd, 'mint_serial')
        self.assertEqual(args.contract, TEST_CONTRACT)
        self.assertEqual(args.serial_id, 10)
        self.assertEqual(args.to, TEST_OTHER)
        self.assertFalse(args.preview)
        self.assertFalse(args.estimate)
        self.assertFalse(args.no_wait)
        self.assertIsNone(args.wallet)
        self.assertEqual(args.web3_rpc, 'http://127.0.0.1:8545')

    def test_mint_serials_keeps_order(self):
        args = self.parse(['mint_serials', TEST_CONTRACT, '10', TEST_OTHER, TEST_WALLET, '--no-wait'])
        self.assertEqual(args.to, [TEST_OTHER, TEST_WALLET])
        self.assertTrue(args.no_wait)

    def test_wallet_address(self):
        args = self.parse(['--wallet', TEST_WALLET, 'abi'])
        self.assertEqual(args.wallet.address, TEST_WALLET)
        self.assertTrue(args.wallet.read_only)

    def test_wallet_key(self):
        args = self.parse(['--wallet', TEST_WALLET_PKEY, 'abi'])
        self.assertEqual(args.wallet.address, TEST_WALLET)
        self.assertFalse(args.wallet.read_only)

    def test_wallet_and_rpc_from_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            pkey = Path(tmp_dir) / 'pkey.conf'
            pkey.write_text(f'{TEST_WALLET_PKEY}\n')
            rpc = Path(tmp_dir) / 'rpc.conf'
            rpc.write_text('https://rpc.example.com/\n')
            args = self.parse(['--wallet', str(pkey), '--web3-rpc', str(rpc), 'abi'])
        self.assertEqual(args.wallet.address, TEST_WALLET)
        self.assertEqual(args.web3_rpc, 'https://rpc.example.com/')

    def test_config_file(self):
        args = cli.build_parser().parse_args(
            ['abi'], config_file_contents=f'wallet = {TEST_WALLET}\nmax-fee = 30\npriority-fee = 10\n'
        )
        self.assertEqual(args.wallet.address, TEST_WALLET)
        self.assertEqual(args.max_fee, 30)
        self.assertEqual(args.priority_fee, 10)

    def test_invalid_wallet(self):
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            self.parse(['--wallet', 'not-a-key', 'abi'])


class TestCLI(TestCase):
    def make_cli(self, argv, wallet=TEST_WALLET_WALLET):
        args = cli.build_parser().parse_args(['--no-colors'] + argv, config_file_contents='')
        return cli.cli.CLI(wallet, OFFLINE_RPC, args)

    def run_cli(self, c):
        f = io.StringIO()
        with contextlib.redirect_stdout(f):
            r = c.run()
        return r, f.getvalue()

    def test_authority(self):
        c = self.make_cli(['abi'], wallet=None)
        self.assertIsInstance(c.authority, authority.Provider)
        self.assertNotIsInstance(c.authority, authority.Signer)

        c = self.make_cli(['abi'], wallet=types.Wallet(TEST_WALLET))
        self.assertNotIsInstance(c.authority, authority.Signer)

        c = self.make_cli(['--max-fee', '30', 'abi'])
        self.assertIsInstance(c.authority, authority.Signer)
        self.assertEqual(c.authority.address, TEST_WALLET)
        self.assertEqual(c.authority._max_fee, 30)

    def test_abi(self):
        r, out = self.run_cli(self.make_cli(['abi']))
        self.assertEqual(json.loads(out), ABI)
        self.assertEqual(r, ABI)

    def test_abi_signatures(self):
        r, out = self.run_cli(self.make_cli(['abi', '-s']))
        self.assertEqual(len(r), 2)
        self.assertTrue(r[0].endswith(' mintSerial(uint256,address) nonpayable'))
        self.assertTrue(r[1].endswith(' mintSerials(uint256,address[]) nonpayable'))
        self.assertEqual(out.splitlines(), r)

    @mock.patch('cli.cli.connect')
    def test_mint_serial(self, connect_mock):
        handle = connect_mock.return_value
        handle.mintSerial.return_value = {'status': 1, 'blockNumber': 5}
        c = self.make_cli(['mint_serial', TEST_CONTRACT, '3', TEST_OTHER])
        r, out = self.run_cli(c)
        connect_mock.assert_called_once_with(TEST_CONTRACT, c.authority)
        handle.mintSerial.assert_called_once_with(3, TEST_OTHER)
        self.assertEqual(r, {'status': 1, 'blockNumber': 5})
        self.assertEqual(out, 'mintSerial mined in block 5\n')

    @mock.patch('cli.cli.connect')
    def test_mint_serial_failed(self, connect_mock):
        connect_mock.return_value.mintSerial.return_value = {'status': 0, 'blockNumber': 5}
        _, out = self.run_cli(self.make_cli(['mint_serial', TEST_CONTRACT, '3', TEST_OTHER]))
        self.assertTrue(out.startswith('mintSerial FAILED: '))

    @mock.patch('cli.cli.connect')
    def test_mint_serials_options(self, connect_mock):
        handle = connect_mock.return_value
        handle.mintSerials.return_value = 4
        r, out = self.run_cli(self.make_cli(['mint_serials', TEST_CONTRACT, '3', TEST_OTHER, TEST_WALLET, '--preview']))
        handle.mintSerials.assert_called_once_with(3, [TEST_OTHER, TEST_WALLET], preview=True)
        self.assertEqual(out, 'mintSerials would return 4\n')

        handle.mintSerials.reset_mock()
        handle.mintSerials.return_value = {'gasUsed': 10, 'effectiveGasPrice': 20}
        r, out = self.run_cli(self.make_cli(['mint_serials', TEST_CONTRACT, '3', TEST_OTHER, '--estimate']))
        handle.mintSerials.assert_called_once_with(3, [TEST_OTHER], estimate_only=True)
        self.assertEqual(out, 'mintSerials gas estimate: 10 (gas price 20)\n')

        handle.mintSerials.reset_mock()
        handle.mintSerials.return_value = b'\x01\x02'
        r, out = self.run_cli(self.make_cli(['mint_serials', TEST_CONTRACT, '3', TEST_OTHER, '--no-wait']))
        handle.mintSerials.assert_called_once_with(3, [TEST_OTHER], wait_for_transaction_receipt=False)
        self.assertEqual(out, 'mintSerials sent: 0102\n')

    def test_invalid_contract(self):
        c = self.make_cli(['mint_serial', '0x1234', '3', TEST_OTHER])
        with self.assertLogs('cli.cli', level='ERROR') as logs:
            r, _ = self.run_cli(c)
        self.assertIs(r, False)
        self.assertIn('is not a valid address', logs.output[0])

    def test_main_read_only(self):
        with self.assertLogs('cli.cli', level='ERROR') as logs:
            r = cli.main(
                [
                    '--no-colors',
                    '--wallet',
                    TEST_WALLET,
                    '--web3-rpc',
                    OFFLINE_RPC,
                    'mint_serial',
                    TEST_CONTRACT,
                    '1',
                    TEST_OTHER,
                ]
            )
        self.assertEqual(r, 1)
        self.assertIn('mintSerial', logs.output[0])
        self.assertIn('changes contract state and requires a signer', logs.output[0])

    def test_main_abi(self):
        with contextlib.redirect_stdout(io.StringIO()):
            r = cli.main(['--no-colors', 'abi'])
        self.assertEqual(r, 0)


class TestCommands(TestCase):
    def test_registry(self):
        self.assertEqual(list(commands.registry), ['mint_serial', 'mint_serials', 'abi'])
        c = commands.registry['mint_serial']
        self.assertEqual(c.help, 'Mint a serial to one address')
        self.assertEqual([a[0] for a in c.arguments[:3]], [('contract',), ('serial_id',), ('to',)])

    @mock.patch.dict(commands.registry, clear=True)
    def test_register(self):
        @commands.command(help='custom help')
        @commands.argument('first')
        @commands.argument('--second', type=int)
        def cmd_sample(self):
            """Docstring"""

        self.assertEqual(commands.registry['sample'].help, 'custom help')
        self.assertEqual(commands.registry['sample'].arguments, [(('first',), {}), (('--second',), {'type': int})])

        with self.assertRaisesRegex(ValueError, 'registered more than once'):

            @commands.command()
            def cmd_sample(self):
                """Docstring"""

        with self.assertRaisesRegex(ValueError, 'must start with cmd_'):

            @commands.command()
            def sample(self):
                """Docstring"""
