"""
Tests for JTL line parsing.
"""

import unittest
import sys
import os

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jtl_splitter.errors import InvalidNumericField, InvalidBooleanField, JTLSplitterError
from jtl_splitter.persistence.parser import parse_line, split_columns
from jtl_splitter.persistence.record import JTLRecord, TooManyColumns


def make_line(timestamp, elapsed="100", success="true", received="1024", sent="256"):
    """Build a 16-column JMeter sample row."""
    return ",".join([
        str(timestamp), str(elapsed), "HTTP Request", "200", "OK", "Thread Group 1-1", "text",
        str(success), "", str(received), str(sent), "1", "1", "http://localhost:8080/", "40", "3",
    ])


class TestSplitColumns(unittest.TestCase):
    """Test delimiter scanning."""

    def test_fields_within_limit(self):
        self.assertEqual(split_columns("a,b,c", 3), ["a", "b", "c"])

    def test_too_many_fields(self):
        self.assertIsNone(split_columns("a,b,c,d", 3))

    def test_empty_fields_kept(self):
        self.assertEqual(split_columns("a,,", 16), ["a", "", ""])

    def test_no_delimiter(self):
        self.assertEqual(split_columns("abc", 16), ["abc"])


class TestParseLine(unittest.TestCase):
    """Test typed record extraction."""

    def test_valid_line(self):
        line = make_line(1500000000000, elapsed=123, success="false", received=2048, sent=512)
        record = parse_line(line, 2)

        self.assertIsInstance(record, JTLRecord)
        self.assertEqual(record.timestamp, 1500000000000)
        self.assertEqual(record.elapsed, 123)
        self.assertFalse(record.success)
        self.assertEqual(record.bytes_received, 2048)
        self.assertEqual(record.bytes_sent, 512)
        self.assertEqual(record.raw_line, line)
        self.assertEqual(record.line_number, 2)

    def test_boolean_is_case_insensitive(self):
        self.assertTrue(parse_line(make_line(1000, success="TRUE"), 2).success)
        self.assertFalse(parse_line(make_line(1000, success="False"), 2).success)

    def test_seventeen_columns_rejected(self):
        line = make_line(1000) + ",extra"
        result = parse_line(line, 7)

        self.assertIsInstance(result, TooManyColumns)
        self.assertEqual(result.line_number, 7)
        self.assertEqual(result.raw_line, line)

    def test_twenty_columns_rejected(self):
        line = ",".join(str(i) for i in range(20))
        self.assertIsInstance(parse_line(line, 3), TooManyColumns)

    def test_custom_column_limit(self):
        line = make_line(1000)
        self.assertIsInstance(parse_line(line, 2, column_limit=12), TooManyColumns)

    def test_invalid_timestamp_is_fatal(self):
        with self.assertRaises(InvalidNumericField) as cm:
            parse_line(make_line("abc"), 5)

        self.assertEqual(cm.exception.line_number, 5)
        self.assertEqual(cm.exception.column, 0)
        self.assertEqual(cm.exception.value, "abc")
        self.assertIsInstance(cm.exception, JTLSplitterError)

    def test_whitespace_is_not_an_integer(self):
        with self.assertRaises(InvalidNumericField):
            parse_line(make_line(" 1000"), 2)

    def test_elapsed_out_of_int32_range(self):
        with self.assertRaises(InvalidNumericField) as cm:
            parse_line(make_line(1000, elapsed=2 ** 31), 2)
        self.assertEqual(cm.exception.column, 1)

    def test_negative_integer_accepted(self):
        self.assertEqual(parse_line(make_line(1000, elapsed="-5"), 2).elapsed, -5)

    def test_invalid_boolean_is_fatal(self):
        with self.assertRaises(InvalidBooleanField) as cm:
            parse_line(make_line(1000, success="yes"), 4)
        self.assertEqual(cm.exception.column, 7)

    def test_missing_columns_are_fatal(self):
        with self.assertRaises(InvalidBooleanField) as cm:
            parse_line("1000,50", 2)
        self.assertIsNone(cm.exception.value)
        self.assertIn("<missing>", str(cm.exception))

    def test_empty_bytes_field_is_fatal(self):
        with self.assertRaises(InvalidNumericField) as cm:
            parse_line(make_line(1000, received=""), 2)
        self.assertEqual(cm.exception.column, 9)


if __name__ == '__main__':
    unittest.main()
