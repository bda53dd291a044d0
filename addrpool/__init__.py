# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
*addrpool* -- a library for reasoning about pools of IP addresses,
CIDR blocks and IP ranges: parsing them from a text, checking whether
they overlap, estimating their sizes and comparing them.
"""

from addrpool.addr_helpers import (
    AddressRange,
    parse_address,
    parse_prefix,
    parse_range,
)
from addrpool.exceptions import (
    ParseError,
    RangeParseError,
)
from addrpool.pool import (
    AddressPool,
    parse_pool,
)


__all__ = [
    'AddressPool',
    'AddressRange',
    'ParseError',
    'RangeParseError',
    'parse_address',
    'parse_pool',
    'parse_prefix',
    'parse_range',
]
