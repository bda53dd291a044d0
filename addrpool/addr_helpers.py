# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Helpers dealing with single entries of an address pool: IP addresses,
CIDR blocks (*networks*, aka *prefixes*) and IP ranges.

Addresses and networks are represented with the standard `ipaddress`
types; ranges -- with `AddressRange`.
"""

from ipaddress import (
    IPv4Address,
    IPv4Network,
    IPv6Address,
    IPv6Network,
    ip_address,
    ip_network,
)
from typing import Union

from addrpool.exceptions import (
    ParseError,
    RangeParseError,
)
from addrpool.regexes import PREFIX_LENGTH_REGEX


IPAddress = Union[IPv4Address, IPv6Address]
IPNetwork = Union[IPv4Network, IPv6Network]


#: The address width (in bits) assumed when computing the number of
#: addresses covered by a CIDR block -- regardless of the actual family
#: of the block.
SIZE_ACCOUNTING_ADDRESS_BITS = 32

#: Only ranges whose bounds are packed into that many bytes (i.e., IPv4
#: ranges) contribute to the number of addresses of a pool.
RANGE_SIZE_ACCOUNTING_PACKED_LENGTH = 4


def parse_address(s: str) -> IPAddress:
    """
    Parse a single IPv4 or IPv6 address.

    >>> parse_address('8.8.8.8')
    IPv4Address('8.8.8.8')
    >>> parse_address('2001:DB8::1')
    IPv6Address('2001:db8::1')

    >>> parse_address('8.8.8')                       # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    >>> parse_address('8.8.8.888')                   # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    >>> parse_address('8.8.8.8/32')                  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    """
    try:
        return ip_address(s)
    except ValueError as exc:
        raise ParseError(s, public_message=(
            '{!a} is not a valid IP address.'.format(s))) from exc


def parse_prefix(s: str) -> IPNetwork:
    """
    Parse a CIDR block specification: `<IP address>/<prefix length>`.

    The prefix length must be a decimal number not greater than the
    bit width of the address family. Host bits are allowed, but they
    are cleared in the resultant network object.

    >>> parse_prefix('10.20.30.0/24')
    IPv4Network('10.20.30.0/24')
    >>> parse_prefix('10.20.30.41/24')
    IPv4Network('10.20.30.0/24')
    >>> parse_prefix('10.20.30.41/32')
    IPv4Network('10.20.30.41/32')
    >>> parse_prefix('10.20.30.41/0')
    IPv4Network('0.0.0.0/0')
    >>> parse_prefix('2001:db8::1/48')
    IPv6Network('2001:db8::/48')

    >>> parse_prefix('8.8.8/32')                     # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    >>> parse_prefix('8.8.8./32')                    # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    >>> parse_prefix('8.8.8.8/33')                   # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    >>> parse_prefix('8.8.8.8/024')                  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    >>> parse_prefix('8.0.0.0/255.0.0.0')            # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    >>> parse_prefix('8.8.8.8')                      # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ParseError: ...
    """
    error_message = '{!a} is not a valid CIDR block.'.format(s)
    try:
        ip_str, prefixlen_str = s.split('/')
    except ValueError as exc:
        raise ParseError(s, public_message=error_message) from exc
    if not PREFIX_LENGTH_REGEX.search(prefixlen_str):
        raise ParseError(s, public_message=error_message)
    try:
        ip = ip_address(ip_str)
    except ValueError as exc:
        raise ParseError(s, public_message=error_message) from exc
    if getattr(ip, 'scope_id', None) is not None:
        # (zones are not allowed in CIDR blocks)
        raise ParseError(s, public_message=error_message)
    prefixlen = int(prefixlen_str)
    if prefixlen > ip.max_prefixlen:
        raise ParseError(s, public_message=error_message)
    return ip_network((ip, prefixlen), strict=False)


def parse_range(s: str) -> 'AddressRange':
    """
    Parse an IP range specification: `<first IP>-<last IP>`.

    See `AddressRange` regarding the constraints the bounds must
    satisfy.

    >>> parse_range('1.1.1.1-1.1.1.10')
    AddressRange('1.1.1.1', '1.1.1.10')

    >>> parse_range('8.8.8.8-8.8.8.7')               # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    RangeParseError: ...
    >>> parse_range('8.8.8.8-8.8.80.10')             # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    RangeParseError: ...
    >>> parse_range('8.8.8.8-8.8.8')                 # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    RangeParseError: ...
    >>> parse_range('8.8.8.1-8.8.8.5-8.8.8.9')       # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    RangeParseError: ...
    """
    fields = s.split('-')
    if len(fields) != 2:
        raise RangeParseError(s, public_message=(
            '{!a} is not an accepted IP range (expected '
            'exactly two dash-separated fields).'.format(s)))
    try:
        first_ip, last_ip = map(ip_address, fields)
    except ValueError as exc:
        raise RangeParseError(s, public_message=(
            '{!a} is not an accepted IP range (its '
            'bounds are not IP addresses).'.format(s))) from exc
    return AddressRange(first_ip, last_ip)


def get_network_size_term(network: IPNetwork) -> float:
    """
    Get the number of addresses a CIDR block adds to the size of a pool.

    The number is always computed as `2 ** (32 - prefix length)`, also
    for IPv6 networks (a known limitation of the size accounting).

    >>> get_network_size_term(IPv4Network('1.2.1.0/28'))
    16.0
    >>> get_network_size_term(IPv4Network('1.1.1.1/32'))
    1.0
    >>> get_network_size_term(IPv4Network('0.0.0.0/0'))
    4294967296.0
    >>> get_network_size_term(IPv6Network('2001:db8::/30'))
    4.0
    """
    return 2.0 ** (SIZE_ACCOUNTING_ADDRESS_BITS - network.prefixlen)


class AddressRange:

    """
    An IP range: all addresses from `first_ip` to `last_ip` (inclusive).

    Constructor args:
        `first_ip`, `last_ip`:
            The bounds: `ipaddress.IPv4Address`/`ipaddress.IPv6Address`
            instances or strings acceptable by `ipaddress.ip_address()`.

    Constructor-raised exceptions:
        `addrpool.exceptions.RangeParseError` -- if any of the
        following constraints is violated:

        * both bounds are addresses of the same family;
        * the bounds differ *only* in their last byte;
        * `first_ip` is (strictly) less than `last_ip`.

    The second constraint makes the range span no more than 256
    addresses, so its size is just a difference of two bytes.

    Instances are immutable and hashable.

    >>> r = AddressRange('1.1.1.1', '1.1.1.10')
    >>> r
    AddressRange('1.1.1.1', '1.1.1.10')
    >>> str(r)
    '1.1.1.1-1.1.1.10'
    >>> r.first_ip, r.last_ip
    (IPv4Address('1.1.1.1'), IPv4Address('1.1.1.10'))
    >>> IPv4Address('1.1.1.5') in r
    True
    >>> IPv4Address('1.1.1.11') in r
    False
    >>> r.size
    10.0
    >>> r == parse_range('1.1.1.1-1.1.1.10')
    True

    >>> AddressRange('2001:db8::1', '2001:db8::ff').size   # (IPv6 ranges do not count)
    0.0

    >>> AddressRange('1.1.1.1', '2001:db8::ff')     # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    RangeParseError: ...
    >>> AddressRange('1.1.1.1', '1.1.1.1')          # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    RangeParseError: ...
    """

    __slots__ = ('_first_ip', '_last_ip')

    def __init__(self, first_ip, last_ip):
        first_ip = self._coerce_bound(first_ip)
        last_ip = self._coerce_bound(last_ip)
        first_packed = first_ip.packed
        last_packed = last_ip.packed
        if len(first_packed) != len(last_packed):
            raise RangeParseError(first_ip, last_ip, public_message=(
                'The bounds of an IP range ({}, {}) must belong to '
                'the same address family.'.format(first_ip, last_ip)))
        if first_packed[:-1] != last_packed[:-1]:
            raise RangeParseError(first_ip, last_ip, public_message=(
                'The bounds of an IP range ({}, {}) must differ only '
                'in their last byte.'.format(first_ip, last_ip)))
        if first_packed[-1] >= last_packed[-1]:
            raise RangeParseError(first_ip, last_ip, public_message=(
                'The first address of an IP range ({}) must be less '
                'than its last address ({}).'.format(first_ip, last_ip)))
        self._first_ip = first_ip
        self._last_ip = last_ip

    @staticmethod
    def _coerce_bound(ip) -> IPAddress:
        if isinstance(ip, (IPv4Address, IPv6Address)):
            return ip
        try:
            return ip_address(ip)
        except ValueError as exc:
            raise RangeParseError(ip, public_message=(
                '{!a} is not a valid IP range bound.'.format(ip))) from exc

    @property
    def first_ip(self) -> IPAddress:
        return self._first_ip

    @property
    def last_ip(self) -> IPAddress:
        return self._last_ip

    @property
    def version(self) -> int:
        return self._first_ip.version

    @property
    def size(self) -> float:
        """
        The number of addresses the range adds to the size of a pool
        (zero for non-IPv4 ranges).

        Note: the difference of the last bytes is *not* wrapped modulo
        256, so a range covering the whole last byte adds 256 (whereas
        byte-typed arithmetic would make it add 0):

        >>> AddressRange('1.1.1.0', '1.1.1.255').size
        256.0
        """
        first_packed = self._first_ip.packed
        last_packed = self._last_ip.packed
        if len(first_packed) != RANGE_SIZE_ACCOUNTING_PACKED_LENGTH:
            return 0.0
        return float(last_packed[-1] - first_packed[-1] + 1)

    def __contains__(self, ip: IPAddress) -> bool:
        return (ip.version == self.version
                and self._first_ip <= ip <= self._last_ip)

    def overlaps_network(self, network: IPNetwork) -> bool:
        """
        Whether the given network contains the first or the last
        address of this range.

        >>> r = AddressRange('1.1.1.1', '1.1.1.10')
        >>> r.overlaps_network(IPv4Network('1.1.1.0/24'))
        True
        >>> r.overlaps_network(IPv4Network('1.1.1.8/30'))
        True
        >>> r.overlaps_network(IPv4Network('1.1.2.0/24'))
        False

        Note that a network placed strictly between the range bounds is
        *not* detected:

        >>> r.overlaps_network(IPv4Network('1.1.1.4/30'))
        False
        """
        return self._first_ip in network or self._last_ip in network

    def overlaps_range(self, other: 'AddressRange') -> bool:
        """
        Whether the first or the last address of the `other` range lies
        within this range.

        >>> r = AddressRange('1.1.1.2', '1.1.1.10')
        >>> r.overlaps_range(AddressRange('1.1.1.4', '1.1.1.6'))
        True
        >>> r.overlaps_range(AddressRange('1.1.1.10', '1.1.1.12'))
        True
        >>> r.overlaps_range(AddressRange('1.1.1.1', '1.1.1.2'))
        True
        >>> r.overlaps_range(AddressRange('1.1.1.11', '1.1.1.12'))
        False

        Note that the relation is *not* symmetric: this range being
        strictly inside the `other` one is *not* detected:

        >>> AddressRange('1.1.1.4', '1.1.1.6').overlaps_range(r)
        False
        """
        return other.first_ip in self or other.last_ip in self

    def __eq__(self, other):
        if isinstance(other, AddressRange):
            return (self._first_ip == other._first_ip
                    and self._last_ip == other._last_ip)
        return NotImplemented

    def __hash__(self):
        return hash((self._first_ip, self._last_ip))

    def __str__(self):
        return '{}-{}'.format(self._first_ip, self._last_ip)

    def __repr__(self):
        return '{}({!r}, {!r})'.format(
            type(self).__qualname__,
            str(self._first_ip),
            str(self._last_ip))
