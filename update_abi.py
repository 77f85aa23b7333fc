#!/usr/bin/env python -u

import json
import re
import subprocess
from pathlib import Path

import configargparse

from serialmint import abi

CONTRACT_DIR = Path(__file__).absolute().parent / 'serialmint' / 'contracts'


def camel_to_snake(name):
    """
    >>> camel_to_snake('ISerialMultipleMintable')
    'i_serial_multiple_mintable'
    >>> camel_to_snake('ERC721Mintable')
    'erc721_mintable'
    """
    name = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    return re.sub('([a-z0-9])([A-Z])', r'\1_\2', name).lower()


class Parser:
    """Generate contract modules from compiled artifacts (hardhat / foundry JSON output)"""

    def __init__(self, artifacts: list[Path], contract_dir: Path = CONTRACT_DIR):
        self.artifacts = artifacts
        self.contract_dir = contract_dir
        self.abis = []

    def load_artifacts(self):
        for artifact in self.artifacts:
            data = json.loads(artifact.read_text())
            name = data.get('contractName') or artifact.stem
            # events and custom errors are not bound
            functions = [x for x in data['abi'] if x.get('type') == 'function']
            abi.validate_abi(functions)
            self.abis.append((name, artifact.name, functions))

    def update_files(self):
        self.contract_dir.mkdir(exist_ok=True)
        for name, source, abi_definition in self.abis:
            f = self.contract_dir / f'{camel_to_snake(name)}.py'
            f.write_text(
                f'''# generated automatically from artifacts/{source} - DO NOT MODIFY

ABI = {repr(abi_definition)}
'''
            )

    def update_init(self):
        modules = [f'from . import {l.stem}' for l in self.contract_dir.glob('*.py') if l.stem != '__init__']
        modules.sort()
        header = '# generated automatically - DO NOT MODIFY'
        (self.contract_dir / '__init__.py').write_text('\n'.join([header, ''] + modules))

    def black_em(self):
        subprocess.check_call(['black', self.contract_dir])

    def run(self, black=True):
        self.load_artifacts()
        self.update_files()
        self.update_init()
        if black:
            self.black_em()


def main(argv=None):
    parser = configargparse.ArgumentParser(description='Regenerate contract ABI modules')
    parser.add_argument('artifact', type=Path, nargs='+', help='compiled contract artifact (JSON with "abi" key)')
    parser.add_argument('--contract-dir', type=Path, default=CONTRACT_DIR, help='target package')
    parser.add_argument('--no-black', action='store_true', help='Do not format generated files')
    args = parser.parse_args(argv)
    Parser(args.artifact, contract_dir=args.contract_dir).run(black=not args.no_black)


if __name__ == '__main__':
    main()
