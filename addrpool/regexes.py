# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
This module contains the regular expression objects used by the
*addrpool* parsing machinery.
"""


import re


#: Separator of pool entries: a comma, a semicolon or a newline.
#:
#: Used by :meth:`addrpool.pool.AddressPool.from_string` (note that
#: empty fields between separators are just skipped).
ENTRY_SEPARATOR_REGEX = re.compile(r'[,;\n]')


#: Blank characters removed from *anywhere* inside a pool entry
#: (not only from its ends).
#:
#: Used by :meth:`addrpool.pool.AddressPool.from_string`.
ENTRY_BLANKS_REGEX = re.compile(r'[ \t]+')


#: Decimal prefix length of a CIDR block (no sign, no leading zeros).
#:
#: Used by :func:`addrpool.addr_helpers.parse_prefix` (the range
#: of the value is checked separately, as it depends on the address
#: family).
PREFIX_LENGTH_REGEX = re.compile(r'\A(?:0|[1-9][0-9]{0,2})\Z', re.ASCII)
