from web3.exceptions import InvalidAddress  # noqa - for others to import from here


class BindingError(Exception):
    """Errors detected by the binding itself (never raised for transport failures)"""


class UnauthorizedOperation(BindingError):
    """
    State-changing function submitted through a read-only provider

    >>> str(UnauthorizedOperation('mintSerial'))
    'mintSerial changes contract state and requires a signer'
    """

    def __str__(self) -> str:
        return f'{self.args[0]} changes contract state and requires a signer'


class InvalidABIError(BindingError, ValueError):
    """Interface descriptor does not have the expected shape"""


class InterfaceMismatchError(BindingError):
    """Handle class and interface descriptor disagree"""
