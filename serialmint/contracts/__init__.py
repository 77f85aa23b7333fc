# generated automatically - DO NOT MODIFY

from . import i_serial_multiple_mintable