# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
The address pool: a bunch of IP addresses, CIDR blocks and IP ranges
(parsed from a text), and the operations of comparing pools and
estimating their sizes.

>>> pool = AddressPool.from_string('8.8.8.8, 1.2.1.1/28; 1.1.1.1-1.1.1.10')
>>> pool
AddressPool('8.8.8.8,1.2.1.0/28,1.1.1.1-1.1.1.10')
>>> pool.overlaps(AddressPool.from_string('1.1.1.5'))
True
>>> pool.has_min_size(27), pool.has_min_size(28)
(True, False)
>>> pool.has_max_size(26), pool.has_max_size(27)
(False, True)
>>> pool == AddressPool.from_string('1.1.1.1-1.1.1.10\\n8.8.8.8\\n1.2.1.0/28')
True
"""

import logging
from collections.abc import (
    Iterable,
    Iterator,
)
from ipaddress import (
    IPv4Address,
    IPv4Network,
)
from typing import Union

from addrpool.addr_helpers import (
    AddressRange,
    IPAddress,
    IPNetwork,
    get_network_size_term,
    parse_address,
    parse_prefix,
    parse_range,
)
from addrpool.exceptions import ParseError
from addrpool.regexes import (
    ENTRY_BLANKS_REGEX,
    ENTRY_SEPARATOR_REGEX,
)


LOGGER = logging.getLogger(__name__)


PoolEntry = Union[IPAddress, IPNetwork, AddressRange]


class AddressPool:

    r"""
    An immutable pool of IP addresses, CIDR blocks (networks) and IP
    ranges.

    Typically, instances are created with the `from_string()` class
    method (see its docs regarding the accepted text format). The
    constructor accepts already made entries:

    Constructor args (all optional, keyword-only):
        `addresses`:
            An iterable of `ipaddress.IPv4Address`/`IPv6Address`
            objects.
        `networks`:
            An iterable of `ipaddress.IPv4Network`/`IPv6Network`
            objects.
        `ranges`:
            An iterable of `addrpool.addr_helpers.AddressRange`
            objects.

    The entries of each kind are kept in their original order
    (duplicates included); they are exposed as tuples by the
    `addresses`, `networks` and `ranges` properties.

    >>> pool = AddressPool(
    ...     addresses=[IPv4Address('8.8.8.8'), IPv4Address('8.8.8.7')],
    ...     networks=[IPv4Network('1.0.0.0/8')],
    ...     ranges=[AddressRange('1.1.1.1', '1.1.1.10')])
    >>> pool.addresses
    (IPv4Address('8.8.8.8'), IPv4Address('8.8.8.7'))
    >>> pool.networks
    (IPv4Network('1.0.0.0/8'),)
    >>> pool.ranges
    (AddressRange('1.1.1.1', '1.1.1.10'),)
    >>> bool(pool)
    True
    >>> bool(AddressPool())
    False

    An empty pool is what an empty (or blank) text is parsed into:

    >>> AddressPool.from_string(' \t ') == AddressPool()
    True
    """

    __slots__ = ('_addresses', '_networks', '_ranges')

    def __init__(self,
                 *,
                 addresses: Iterable[IPAddress] = (),
                 networks: Iterable[IPNetwork] = (),
                 ranges: Iterable[AddressRange] = ()) -> None:
        self._addresses = tuple(addresses)
        self._networks = tuple(networks)
        self._ranges = tuple(ranges)

    @classmethod
    def from_string(cls, text: str) -> 'AddressPool':
        r"""
        Parse the given text into a new `AddressPool`.

        Entries are separated with commas, semicolons and/or newlines
        (empty entries, i.e., nothing between two separators, are
        ignored). All spaces and tabs are removed from each entry, and
        then the entry is tried -- in this order -- as:

        1. an IP address (e.g., `'1.2.3.4'`);
        2. a CIDR block (e.g., `'1.2.3.0/24'`);
        3. an IP range (e.g., `'1.2.3.4-1.2.3.10'`; see the
           `addrpool.addr_helpers.AddressRange` docs regarding the
           constraints).

        Raises:
            `addrpool.exceptions.ParseError` -- if any entry is not any
            of the above (no partial result is provided).

        >>> AddressPool.from_string('8.8.8.7;8.8.8.8\n1.0.0.0/8,1.1.1.1-1.1.1.10')
        AddressPool('8.8.8.7,8.8.8.8,1.0.0.0/8,1.1.1.1-1.1.1.10')
        >>> AddressPool.from_string(' 8.8. 8.8 ,,\t2001:db8::1 ,')
        AddressPool('8.8.8.8,2001:db8::1')
        >>> AddressPool.from_string('')
        AddressPool('')

        >>> AddressPool.from_string('8.8.8.8,8.8.8/32')
        Traceback (most recent call last):
          ...
        addrpool.exceptions.ParseError: '8.8.8/32' is not an IP address, CIDR block or IP range.
        >>> AddressPool.from_string('8.8.8.8_1.1.1.1')
        Traceback (most recent call last):
          ...
        addrpool.exceptions.ParseError: '8.8.8.8_1.1.1.1' is not an IP address, CIDR block or IP range.

        An entry made only of spaces and/or tabs is not an empty one, so
        it is rejected:

        >>> AddressPool.from_string('8.8.8.8, ,1.1.1.1')
        Traceback (most recent call last):
          ...
        addrpool.exceptions.ParseError: '' is not an IP address, CIDR block or IP range.
        """
        if not isinstance(text, str):
            raise TypeError('{!a} is not a `str`'.format(text))
        addresses = []
        networks = []
        ranges = []
        for entry in cls._iter_entries(text):
            try:
                addresses.append(parse_address(entry))
                continue
            except ParseError:
                pass
            try:
                networks.append(parse_prefix(entry))
                continue
            except ParseError:
                pass
            try:
                ranges.append(parse_range(entry))
            except ParseError as exc:
                LOGGER.debug('Rejecting pool entry %a (%s)', entry, exc)
                raise ParseError(entry, public_message=(
                    '{!a} is not an IP address, CIDR block '
                    'or IP range.'.format(entry))) from exc
        LOGGER.debug('Parsed an address pool: %d address(es), '
                     '%d network(s), %d range(s)',
                     len(addresses), len(networks), len(ranges))
        return cls(addresses=addresses, networks=networks, ranges=ranges)

    @staticmethod
    def _iter_entries(text: str) -> Iterator[str]:
        text = text.strip()
        if not text:
            return
        for field in ENTRY_SEPARATOR_REGEX.split(text):
            if not field:
                continue
            yield ENTRY_BLANKS_REGEX.sub('', field)

    @property
    def addresses(self) -> tuple[IPAddress, ...]:
        return self._addresses

    @property
    def networks(self) -> tuple[IPNetwork, ...]:
        return self._networks

    @property
    def ranges(self) -> tuple[AddressRange, ...]:
        return self._ranges

    #
    # Overlap tests

    def overlaps(self, *others: 'AddressPool') -> bool:
        """
        Whether this pool overlaps *any* of the given pools.

        Two pools overlap if any of the following is true:

        * one pool's network overlaps the other pool's network;
        * one pool's network contains the other pool's address;
        * both pools contain the same address;
        * one pool's network contains the first or the last address
          of the other pool's range;
        * one pool's range contains the other pool's address;
        * the first or the last address of the other pool's range lies
          within this pool's range.

        Note that the range-related tests consider only the range
        bounds, so they miss some cases of overlapping (e.g., a network
        lying strictly inside a range).

        >>> pool = AddressPool.from_string('2.0.0.0/8,1.0.0.0/8')
        >>> pool.overlaps(AddressPool.from_string('1.1.1.1/24,3.3.3.3/24'))
        True
        >>> pool.overlaps(AddressPool.from_string('4.0.0.0/8,3.0.0.0/8'))
        False
        >>> pool.overlaps(AddressPool.from_string('4.0.0.0/8'),
        ...               AddressPool.from_string('2.2.2.2'))
        True
        >>> pool.overlaps()
        False
        """
        return any(map(self._overlaps_one, others))

    def _overlaps_one(self, other: 'AddressPool') -> bool:
        return (
            any(net1.overlaps(net2)
                for net1 in self._networks
                for net2 in other._networks)
            or any(ip2 in net1
                   for net1 in self._networks
                   for ip2 in other._addresses)
            or any(ip1 in net2
                   for net2 in other._networks
                   for ip1 in self._addresses)
            or any(ip1 == ip2
                   for ip1 in self._addresses
                   for ip2 in other._addresses)
            or any(r2.overlaps_network(net1)
                   for net1 in self._networks
                   for r2 in other._ranges)
            or any(r1.overlaps_network(net2)
                   for net2 in other._networks
                   for r1 in self._ranges)
            or any(ip2 in r1
                   for r1 in self._ranges
                   for ip2 in other._addresses)
            or any(ip1 in r2
                   for r2 in other._ranges
                   for ip1 in self._addresses)
            or any(r1.overlaps_range(r2)
                   for r1 in self._ranges
                   for r2 in other._ranges))

    #
    # Size predicates

    def has_min_size(self, min_size: int) -> bool:
        """
        Whether this pool contains at least `min_size` addresses.

        The number of addresses is computed approximately: each address
        entry counts as one (duplicates are *not* eliminated), each
        network counts as `2 ** (32 - prefix length)`, each IPv4 range
        counts as the number of addresses it spans, and IPv6 ranges do
        not count at all. The accumulation stops as soon as the result
        is known.

        >>> pool = AddressPool.from_string('1.1.1.1/32,1.2.1.1/28')
        >>> pool.has_min_size(17)
        True
        >>> pool.has_min_size(18)
        False
        >>> AddressPool().has_min_size(0)
        True
        """
        return any(count >= min_size
                   for count in self._iter_accumulated_size())

    def has_max_size(self, max_size: int) -> bool:
        """
        Whether this pool contains at most `max_size` addresses.

        The number of addresses is computed in the same way as for
        `has_min_size()`.

        Note: for `max_size` equal to 0, the result is *always* true
        (this value is interpreted as *no limit*).

        >>> pool = AddressPool.from_string('1.1.1.1,1.1.1.11-1.1.1.15,1.2.1.0/24')
        >>> pool.has_max_size(261)
        False
        >>> pool.has_max_size(262)
        True
        >>> pool.has_max_size(0)
        True
        """
        if max_size == 0:
            return True
        return all(count <= max_size
                   for count in self._iter_accumulated_size())

    def _iter_accumulated_size(self) -> Iterator[float]:
        count = float(len(self._addresses))
        yield count
        for net in self._networks:
            count += get_network_size_term(net)
            yield count
        for r in self._ranges:
            size = r.size
            if size:
                count += size
                yield count

    #
    # Equality tests

    def equal(self, other: 'AddressPool') -> bool:
        """
        Whether this pool and the `other` one contain the same entries
        (i.e., the same addresses, the same networks and the same ranges,
        each with the same number of duplicates), regardless of their
        order.

        >>> pool = AddressPool.from_string('8.8.8.8,8.8.8.7')
        >>> pool.equal(AddressPool.from_string('8.8.8.7,8.8.8.8'))
        True
        >>> pool.equal(AddressPool.from_string('8.8.8.7,8.8.8.8,8.8.8.8'))
        False
        >>> pool.equal(AddressPool.from_string('8.8.8.7/32,8.8.8.8/32'))
        False
        """
        return all(
            self._get_sorted_str_list(entries) == self._get_sorted_str_list(other_entries)
            for entries, other_entries in [
                (self._addresses, other._addresses),
                (self._networks, other._networks),
                (self._ranges, other._ranges),
            ])

    @staticmethod
    def _get_sorted_str_list(entries: Iterable[PoolEntry]) -> list[str]:
        return sorted(map(str, entries))

    def __eq__(self, other):
        if isinstance(other, AddressPool):
            return self.equal(other)
        return NotImplemented

    def __hash__(self):
        return hash((
            tuple(self._get_sorted_str_list(self._addresses)),
            tuple(self._get_sorted_str_list(self._networks)),
            tuple(self._get_sorted_str_list(self._ranges)),
        ))

    #
    # Rendering

    def as_str_list(self) -> list[str]:
        """
        Get the canonical string forms of all entries: first addresses,
        then networks, then ranges (each kind in its original order).

        >>> AddressPool.from_string(
        ...     '1.1.1.1,1.1.1.5-1.1.1.10,1.1.1.2,2.2.2.0/24,'
        ...     '1.1.1.20-1.1.1.25,2.2.3.0/24'
        ... ).as_str_list()                                    # doctest: +NORMALIZE_WHITESPACE
        ['1.1.1.1', '1.1.1.2', '2.2.2.0/24', '2.2.3.0/24',
         '1.1.1.5-1.1.1.10', '1.1.1.20-1.1.1.25']
        >>> AddressPool().as_str_list()
        []
        """
        return [str(entry) for entry in self._iter_all_entries()]

    def _iter_all_entries(self) -> Iterator[PoolEntry]:
        yield from self._addresses
        yield from self._networks
        yield from self._ranges

    def __bool__(self) -> bool:
        return bool(self._addresses or self._networks or self._ranges)

    def __str__(self) -> str:
        return ','.join(self.as_str_list())

    def __repr__(self) -> str:
        return f'{type(self).__qualname__}({str(self)!r})'


def parse_pool(text: str) -> AddressPool:
    """
    Parse the given text into an `AddressPool` (a shortcut for
    `AddressPool.from_string()`).

    >>> parse_pool('8.8.8.8').addresses
    (IPv4Address('8.8.8.8'),)
    """
    return AddressPool.from_string(text)
