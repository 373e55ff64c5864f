"""Parsing utilities for hex quantities and block tags."""

import re

from decimal import Decimal

from typing import Any

from ethrpc.helpers.constants import BLOCK_HASH_LENGTH, SYMBOLIC_BLOCK_TAGS
from ethrpc.helpers.errors import InvalidArgument, InvalidNumericInput, MalformedResponse
from ethrpc.numeric.big_number import BigNumber


type BlockTag = int | BigNumber | str

_HEX_QUANTITY = re.compile(r"^0x[0-9a-fA-F]+$")
_BLOCK_HASH = re.compile(r"^0x[0-9a-fA-F]{64}$")


def parse_hex_int(hex_value: str | None, field: str = "quantity") -> int:
    """Parse a hex string returned by a node to a plain integer.

    Args:
        hex_value: Hex-encoded string
        field: Field name used in the error

    Returns:
        int: Parsed integer value

    Raises:
        MalformedResponse: If the value is not a 0x-prefixed hex string

    Example:
        >>> parse_hex_int("0xff")
        255
    """
    if not isinstance(hex_value, str) or not _HEX_QUANTITY.match(hex_value):
        raise MalformedResponse(field, f"expected hex quantity, got {hex_value!r}")
    return int(hex_value, 16)


def parse_hex_quantity(hex_value: Any, field: str = "quantity") -> BigNumber:
    """Parse a hex quantity returned by a node into a BigNumber.

    Example:
        >>> parse_hex_quantity("0xde0b6b3a7640000").to_decimal_string()
        '1000000000000000000'
    """
    try:
        return BigNumber.from_hex(hex_value)
    except InvalidNumericInput as e:
        raise MalformedResponse(field, e) from e


def is_block_hash(block_tag: object) -> bool:
    """Return True for a 66-character block hash string."""
    return isinstance(block_tag, str) and len(block_tag) == BLOCK_HASH_LENGTH


def prepare_block_tag(block_tag: BlockTag) -> str:
    """Convert a block tag into the form nodes expect.

    Numbers become minimal hex, symbolic tags, block hashes and hex strings
    pass through unchanged.

    Args:
        block_tag: Block number, block hash, hex string or symbolic tag

    Returns:
        str: Block tag ready to be sent

    Raises:
        InvalidArgument: If the tag is negative, fractional or unrecognised

    Example:
        >>> prepare_block_tag(14848183)
        '0xe290b7'
        >>> prepare_block_tag("latest")
        'latest'
    """
    if isinstance(block_tag, bool):
        msg = f"Invalid block tag: {block_tag!r}"
        raise InvalidArgument(msg)

    if isinstance(block_tag, int | BigNumber):
        if block_tag < 0:
            msg = f"Block number must not be negative: {block_tag}"
            raise InvalidArgument(msg)
        if isinstance(block_tag, int):
            return hex(block_tag)
        return block_tag.to_hex_string()

    if isinstance(block_tag, str):
        if block_tag in SYMBOLIC_BLOCK_TAGS:
            return block_tag
        if is_block_hash(block_tag):
            if not _BLOCK_HASH.match(block_tag):
                msg = f"Invalid block hash: {block_tag!r}"
                raise InvalidArgument(msg)
            return block_tag
        if _HEX_QUANTITY.match(block_tag):
            return block_tag

    msg = f"Invalid block tag: {block_tag!r}"
    raise InvalidArgument(msg)


def encode_quantity(value: int | BigNumber | Decimal | str) -> str:
    """Encode a caller supplied quantity as a hex string.

    Strings are assumed to be already encoded and pass through.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        msg = f"Invalid quantity: {value!r}"
        raise InvalidArgument(msg)
    if isinstance(value, int):
        return hex(value)
    if isinstance(value, Decimal):
        value = BigNumber.from_decimal(value)
    if isinstance(value, BigNumber):
        return value.to_hex_string()
    msg = f"Invalid quantity: {value!r}"
    raise InvalidArgument(msg)


__all__ = [
    "BlockTag",
    "encode_quantity",
    "is_block_hash",
    "parse_hex_int",
    "parse_hex_quantity",
    "prepare_block_tag",
]
