from .authority import Provider, Signer
from .factory import ISerialMultipleMintable, ISerialMultipleMintableFactory, bind, connect

VERSION = '0.1.0'
