import click
from ape.utils import ZERO_ADDRESS
from eth_utils import to_checksum_address


class ChecksumAddress(click.ParamType):
    """An EIP-55 address; the zero address is rejected unless explicitly allowed."""

    name = "checksum_address"

    def __init__(self, allow_zero: bool = False):
        self.allow_zero = allow_zero

    def convert(self, value, param, ctx):
        try:
            address = to_checksum_address(value)
        except (TypeError, ValueError):
            self.fail(f"'{value}' is not a valid address", param, ctx)
        if address == ZERO_ADDRESS and not self.allow_zero:
            self.fail("the zero address is not allowed here", param, ctx)
        return address
