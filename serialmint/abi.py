"""
Helpers around contract interface descriptors (ABI)

Only function records are handled, events and errors are not part of the bindings.
"""
import inspect

from web3 import Web3

from .errors import InterfaceMismatchError, InvalidABIError

STATE_MUTABILITY = ('nonpayable', 'payable', 'view', 'pure')
READ_ONLY = ('view', 'pure')
FUNCTION_KEYS = ('inputs', 'name', 'outputs', 'stateMutability', 'type')


def _validate_params(function_name, kind, params):
    if not isinstance(params, list):
        raise InvalidABIError(f'{function_name}: {kind} must be a list')
    for i, param in enumerate(params):
        if not isinstance(param, dict):
            raise InvalidABIError(f'{function_name}: {kind}[{i}] must be a dict')
        if not isinstance(param.get('name'), str) or not isinstance(param.get('type'), str):
            raise InvalidABIError(f'{function_name}: {kind}[{i}] requires string name and type')
        if not param['type']:
            raise InvalidABIError(f'{function_name}: {kind}[{i}] has an empty type')


def validate_abi(descriptor: list[dict]) -> list[dict]:
    """
    Check that `descriptor` has the standard contract interface shape

    >>> validate_abi([{'inputs': [], 'name': 'x', 'outputs': [], 'stateMutability': 'view', 'type': 'function'}])
    [{'inputs': [], 'name': 'x', 'outputs': [], 'stateMutability': 'view', 'type': 'function'}]
    >>> validate_abi([{'inputs': [], 'name': 'x', 'outputs': [], 'stateMutability': 'cheap', 'type': 'function'}])
    Traceback (most recent call last):
    ...
    serialmint.errors.InvalidABIError: x: unknown stateMutability 'cheap'
    """
    if not isinstance(descriptor, list):
        raise InvalidABIError('ABI must be a list of records')
    seen = set()
    for i, record in enumerate(descriptor):
        if not isinstance(record, dict):
            raise InvalidABIError(f'record {i} must be a dict')
        missing = [k for k in FUNCTION_KEYS if k not in record]
        if missing:
            raise InvalidABIError(f'record {i} is missing {", ".join(missing)}')
        name = record['name']
        if not isinstance(name, str) or not name:
            raise InvalidABIError(f'record {i} has an invalid name')
        if record['type'] != 'function':
            raise InvalidABIError(f'{name}: type must be "function", got {record["type"]!r}')
        if record['stateMutability'] not in STATE_MUTABILITY:
            raise InvalidABIError(f'{name}: unknown stateMutability {record["stateMutability"]!r}')
        if name in seen:
            raise InvalidABIError(f'{name}: declared more than once')
        seen.add(name)
        _validate_params(name, 'inputs', record['inputs'])
        _validate_params(name, 'outputs', record['outputs'])
    return descriptor


def function_names(descriptor: list[dict]) -> list[str]:
    return [x['name'] for x in descriptor if x.get('type') == 'function']


def function_abi(descriptor: list[dict], name: str) -> dict:
    for x in descriptor:
        if x.get('type') == 'function' and x.get('name') == name:
            return x
    raise KeyError(name)


def is_state_changing(function: dict) -> bool:
    return function['stateMutability'] not in READ_ONLY


def signature(function: dict) -> str:
    """
    Canonical function signature, as hashed for the selector

    >>> signature({'name': 'mintSerials', 'inputs': [{'name': 'serialId', 'type': 'uint256'}, {'name': 'to', 'type': 'address[]'}]})
    'mintSerials(uint256,address[])'
    """
    return f'{function["name"]}({",".join(x["type"] for x in function["inputs"])})'


def selector(function: dict) -> str:
    return '0x' + bytes(Web3.keccak(text=signature(function))[:4]).hex()


def _public_methods(cls):
    return {
        name: member
        for name, member in inspect.getmembers(cls, predicate=inspect.isfunction)
        if not name.startswith('_')
    }


def check_interface(cls, descriptor: list[dict]):
    """
    Make sure the public methods of `cls` are exactly the functions in `descriptor`
    and that their positional parameters follow the declared inputs
    """
    methods = _public_methods(cls)
    declared = set(function_names(descriptor))
    if set(methods) != declared:
        raise InterfaceMismatchError(
            f'{cls.__name__} exposes {sorted(methods)} but the ABI declares {sorted(declared)}'
        )
    for name, method in methods.items():
        params = [
            p.name
            for p in inspect.signature(method).parameters.values()
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        ][1:]
        expected = [x['name'] for x in function_abi(descriptor, name)['inputs']]
        if params != expected:
            raise InterfaceMismatchError(f'{cls.__name__}.{name} takes {params} but the ABI declares {expected}')
