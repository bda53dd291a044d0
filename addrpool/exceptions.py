# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Exceptions raised by the *addrpool* library.

Only parsing can fail: all queries on an already constructed
`addrpool.pool.AddressPool` (overlap tests, size predicates, equality
tests, rendering) are total.
"""


#
# Generic mix-ins
#

class _ErrorWithPublicMessageMixin:

    r"""
    A mix-in class that provides the `public_message` property.

    The value of this property is a `str`.  It is taken either from the
    `public_message` constructor keyword argument or -- if the argument
    was not specified -- from the value of the `default_public_message`
    attribute.

    The public message should be a complete sentence (or several
    sentences): first word capitalized (if not being an identifier
    that begins with a lower case letter) + the period at the end.

    The `str` conversion uses the value of `public_message`:

    >>> class SomeError(_ErrorWithPublicMessageMixin, Exception):
    ...     pass
    ...
    >>> str(SomeError('a', 'b'))  # using attribute default_public_message
    'Internal error.'
    >>> str(SomeError('a', 'b', public_message='Spam.'))
    'Spam.'

    The `repr()` conversion results in a programmer-readable
    representation (containing the class name, `repr()`-formatted
    constructor arguments and the `public_message` property):

    >>> SomeError('a', 'b')   # using class's default_public_message
    <SomeError: args=('a', 'b'); public_message='Internal error.'>
    >>> SomeError('a', 'b', public_message='Spam.')
    <SomeError: args=('a', 'b'); public_message='Spam.'>

    >>> SomeError('a', spam='b')
    Traceback (most recent call last):
      ...
    TypeError: illegal keyword arguments for SomeError constructor: 'spam'
    """

    #: (overridable in subclasses)
    default_public_message = 'Internal error.'

    def __init__(self, *args, **kwargs):
        try:
            public_message = kwargs.pop('public_message')
        except KeyError:
            pass
        else:
            self._public_message = str(public_message)
        try:
            super().__init__(*args, **kwargs)
        except TypeError:
            if kwargs:
                raise TypeError(
                    'illegal keyword arguments for {} constructor: {}'.format(
                        self.__class__.__name__,
                        ', '.join(sorted(map(repr, kwargs))))) from None
            else:
                raise

    @property
    def public_message(self):
        """The aforementioned property."""
        try:
            return self._public_message
        except AttributeError:
            # (in subclasses `default_public_message` can also be a @property)
            self._public_message = str(self.default_public_message)
            return self._public_message

    def __str__(self):
        return self.public_message

    def __repr__(self):
        return ('<{0.__class__.__name__}: args={0.args!r}; '
                'public_message={0.public_message!r}>'.format(self))


#
# Actual exception classes
#

class ParseError(_ErrorWithPublicMessageMixin, ValueError):

    """
    Raised when a text cannot be parsed into an address pool (or into
    one of its entries).

    Parsing is all-or-nothing: the first entry that is neither an IP
    address, nor a CIDR block, nor an IP range causes this exception,
    and no partially filled pool is made available.

    >>> exc = ParseError('8.8.8/32')
    >>> exc.args
    ('8.8.8/32',)
    >>> exc.public_message   # using attribute default_public_message
    'Not an IP address, CIDR block or IP range.'
    >>> str(exc)
    'Not an IP address, CIDR block or IP range.'

    >>> exc = ParseError('x', public_message='"x" is not an IP address.')
    >>> str(exc)
    '"x" is not an IP address.'
    >>> isinstance(exc, ValueError)
    True
    """

    default_public_message = 'Not an IP address, CIDR block or IP range.'


class RangeParseError(ParseError):

    """
    Raised when an IP range is malformed or violates the range
    constraints (see: `addrpool.addr_helpers.AddressRange`).

    >>> exc = RangeParseError('8.8.8.8-8.8.8.7')
    >>> str(exc)
    'Not an accepted IP range.'
    >>> isinstance(exc, ParseError)
    True
    """

    default_public_message = 'Not an accepted IP range.'
