"""
Account address handling
"""
import re
from typing import Union

from cadence_resolver.exceptions import InvalidAddress

# Flow account addresses are 8 bytes long
ADDRESS_LENGTH = 8

HEX_REGEX = re.compile(r"^[0-9a-fA-F]*$")


class Address:
    """
    Account address, rendered as 0x followed by 16 lowercase hex digits
    """

    __slots__ = ("_value",)

    def __init__(self, value: bytes = bytes(ADDRESS_LENGTH)):
        """Init the object

        Args:
            value (bytes): raw address. Shorter values are left-padded with zeros

        Raises:
            InvalidAddress: If the value is longer than an address
        """
        if len(value) > ADDRESS_LENGTH:
            raise InvalidAddress(f"address is longer than {ADDRESS_LENGTH} bytes: {value.hex()}")
        self._value: bytes = value.rjust(ADDRESS_LENGTH, b"\x00")

    @staticmethod
    def from_hex(hex_address: str) -> "Address":
        """Convert a hex string to an address.

        The 0x prefix is optional and the digits are case-insensitive.
        Short strings are left-padded; longer strings (such as 40 digits) are accepted
        when the extra leading digits are zeros.

        Args:
            hex_address (str): hex address

        Raises:
            InvalidAddress: If the string is not an hex address

        Returns:
            Address: the address
        """
        digits = hex_address.strip()
        if digits[:2] in ("0x", "0X"):
            digits = digits[2:]
        if not digits or not HEX_REGEX.match(digits):
            raise InvalidAddress(f"invalid hex address: {hex_address!r}")

        extra = len(digits) - 2 * ADDRESS_LENGTH
        if extra > 0:
            if digits[:extra].strip("0"):
                raise InvalidAddress(f"address does not fit in {ADDRESS_LENGTH} bytes: {hex_address}")
            digits = digits[extra:]

        return Address(bytes.fromhex(digits.rjust(2 * ADDRESS_LENGTH, "0")))

    @staticmethod
    def convert(address: Union["Address", str, bytes, None]) -> "Address":
        """Build an address from any accepted representation

        Args:
            address (Union[Address, str, bytes, None]): address, hex string, raw bytes.
                None is the zero address

        Returns:
            Address: the address
        """
        if address is None:
            return Address()
        if isinstance(address, Address):
            return address
        if isinstance(address, bytes):
            return Address(address)
        return Address.from_hex(address)

    @property
    def raw(self) -> bytes:
        """Return the raw address

        Returns:
            bytes: address bytes
        """
        return self._value

    def hex(self) -> str:
        """Return the address without prefix

        Returns:
            str: 16 lowercase hex digits
        """
        return self._value.hex()

    def hex_with_prefix(self) -> str:
        """Return the address with its 0x prefix

        Returns:
            str: 0x followed by 16 lowercase hex digits
        """
        return "0x" + self.hex()

    def is_zero(self) -> bool:
        return not any(self._value)

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Address({self.hex_with_prefix()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)
