# Copyright (c) 2013-2025 NASK. All rights reserved.

import unittest

from unittest_expander import (
    expand,
    foreach,
    param,
)

from addrpool.exceptions import (
    ParseError,
    RangeParseError,
)


@expand
class TestParseErrorClasses(unittest.TestCase):

    @foreach(
        param(
            exc_class=ParseError,
            expected_default='Not an IP address, CIDR block or IP range.',
        ).label('ParseError'),
        param(
            exc_class=RangeParseError,
            expected_default='Not an accepted IP range.',
        ).label('RangeParseError'),
    )
    def test_default_public_message(self, exc_class, expected_default):
        exc = exc_class('foo')
        self.assertEqual(exc.public_message, expected_default)
        self.assertEqual(str(exc), expected_default)
        self.assertEqual(exc.args, ('foo',))

    @foreach(ParseError, RangeParseError)
    def test_custom_public_message(self, exc_class):
        exc = exc_class('foo', 'bar', public_message='Spam.')
        self.assertEqual(exc.public_message, 'Spam.')
        self.assertEqual(str(exc), 'Spam.')
        self.assertEqual(exc.args, ('foo', 'bar'))
        self.assertEqual(
            repr(exc),
            "<{}: args=('foo', 'bar'); public_message='Spam.'>".format(exc_class.__name__))

    @foreach(ParseError, RangeParseError)
    def test_is_value_error(self, exc_class):
        with self.assertRaises(ValueError):
            raise exc_class('foo')

    def test_range_error_is_parse_error(self):
        self.assertTrue(issubclass(RangeParseError, ParseError))

    def test_illegal_kwargs(self):
        with self.assertRaisesRegex(TypeError, r"illegal keyword arguments.*'spam'"):
            ParseError('foo', spam='bar')
