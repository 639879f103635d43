import unittest

from conninfo_parse.catalog import DEFAULT_CATALOG
from conninfo_parse.exceptions import ConninfoParseError
from conninfo_parse.parser import parse
from conninfo_parse.uri import parse_uri, percent_decode, uri_prefix_length


def values(parameters) -> dict:
    return {parameter.keyword: parameter.value for parameter in parameters}


class TestUri(unittest.TestCase):
    """Test the parsing of connection URIs."""

    def test_full_uri(self) -> None:
        """Test a URI with all its components."""
        result = values(parse("postgresql://u:p@h:5432/db?sslmode=require", environ={}))
        self.assertEqual(result["user"], "u")
        self.assertEqual(result["password"], "p")
        self.assertEqual(result["host"], "h")
        self.assertEqual(result["port"], "5432")
        self.assertEqual(result["dbname"], "db")
        self.assertEqual(result["sslmode"], "require")
        self.assertEqual(len(result), len(DEFAULT_CATALOG))

    def test_prefixes(self) -> None:
        """Test the accepted URI schemes."""
        self.assertEqual(uri_prefix_length("postgresql://h"), len("postgresql://"))
        self.assertEqual(uri_prefix_length("postgres://h"), len("postgres://"))
        self.assertEqual(uri_prefix_length("host=h"), 0)
        self.assertEqual(parse_uri("postgres://h/db", DEFAULT_CATALOG), {"host": "h", "dbname": "db"})

    def test_explicit_values(self) -> None:
        """Test the values defined by a URI."""
        self.assertEqual(parse_uri("postgresql://", DEFAULT_CATALOG), {})
        self.assertEqual(parse_uri("postgresql://u@h", DEFAULT_CATALOG), {"user": "u", "host": "h"})
        self.assertEqual(parse_uri("postgresql:///db", DEFAULT_CATALOG), {"dbname": "db"})
        self.assertEqual(parse_uri("postgresql://:5433", DEFAULT_CATALOG), {"port": "5433"})
        # an @ after the path is not a user separator
        self.assertEqual(
            parse_uri("postgresql://h/d@b", DEFAULT_CATALOG), {"host": "h", "dbname": "d@b"}
        )

    def test_percent_decoding(self) -> None:
        """Test that components are percent-decoded."""
        result = parse_uri("postgresql://us%40er:p%3Ass@h%2Dx/d%20b?application_name=a%26b", DEFAULT_CATALOG)
        self.assertEqual(result["user"], "us@er")
        self.assertEqual(result["password"], "p:ss")
        self.assertEqual(result["host"], "h-x")
        self.assertEqual(result["dbname"], "d b")
        self.assertEqual(result["application_name"], "a&b")
        self.assertEqual(percent_decode("a+b"), "a+b")
        self.assertEqual(percent_decode("caf%C3%A9"), "café")

    def test_invalid_percent_encoding(self) -> None:
        """Test malformed percent-encoded sequences."""
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql://h/%zz", environ={})
        self.assertEqual(cm.exception.message, 'invalid percent-encoded token: "%zz"')
        self.assertEqual(cm.exception.position, 15)
        with self.assertRaises(ConninfoParseError):
            parse("postgresql://h/db%2", environ={})
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql://h/a%00b", environ={})
        self.assertEqual(
            cm.exception.message, 'forbidden value %00 in percent-encoded value: "a%00b"'
        )

    def test_ipv6(self) -> None:
        """Test IPv6 host addresses."""
        result = parse_uri("postgresql://[::1]:5433/db", DEFAULT_CATALOG)
        self.assertEqual(result["host"], "::1")
        self.assertEqual(result["port"], "5433")
        self.assertEqual(
            parse_uri("postgresql://[2001:db8::1234]/db", DEFAULT_CATALOG)["host"], "2001:db8::1234"
        )

    def test_invalid_ipv6(self) -> None:
        """Test malformed IPv6 host addresses."""
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql://[::1", environ={})
        self.assertIn('matching "]"', cm.exception.message)
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql://[]/db", environ={})
        self.assertIn("may not be empty", cm.exception.message)
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql://[::1]x/db", environ={})
        self.assertIn('unexpected character "x" at position 19', cm.exception.message)

    def test_multi_host(self) -> None:
        """Test that multiple hosts are kept as single values."""
        result = values(parse("postgresql://h1:1,h2:2/db", environ={}))
        self.assertEqual(result["host"], "h1,h2")
        self.assertEqual(result["port"], "1,2")

        result = values(parse("postgresql://h1,h2/db", environ={}))
        self.assertEqual(result["host"], "h1,h2")
        self.assertEqual(result["port"], ",")

        result = parse_uri("postgresql://h1/db", DEFAULT_CATALOG)
        self.assertNotIn("port", result)

        result = parse_uri("postgresql://h1:1,[::1],h3:3", DEFAULT_CATALOG)
        self.assertEqual(result["host"], "h1,::1,h3")
        self.assertEqual(result["port"], "1,,3")

    def test_query(self) -> None:
        """Test query parameters."""
        result = parse_uri(
            "postgresql://h/db?connect_timeout=10&application_name=app&", DEFAULT_CATALOG
        )
        self.assertEqual(result["connect_timeout"], "10")
        self.assertEqual(result["application_name"], "app")
        # query parameters override the other components
        self.assertEqual(parse_uri("postgresql://h?host=other", DEFAULT_CATALOG)["host"], "other")
        self.assertEqual(parse_uri("postgresql://h?", DEFAULT_CATALOG), {"host": "h"})

    def test_ssl_true(self) -> None:
        """Test that ssl=true is accepted as sslmode=require."""
        result = values(parse("postgresql://h?ssl=true", environ={}))
        self.assertEqual(result["sslmode"], "require")
        with self.assertRaises(ConninfoParseError):
            parse("postgresql://h?ssl=false", environ={})

    def test_unknown_query_parameter(self) -> None:
        """Test that unknown query parameters are rejected."""
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql://h/db?fake=1", environ={})
        self.assertEqual(cm.exception.message, 'invalid URI query parameter: "fake"')

    def test_query_separators(self) -> None:
        """Test malformed query parameters."""
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql://h/db?sslmode", environ={})
        self.assertIn('missing key/value separator "="', cm.exception.message)
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql://h/db?sslmode=a=b", environ={})
        self.assertIn('extra key/value separator "="', cm.exception.message)

    def test_missing_scheme_separator(self) -> None:
        """Test a scheme not followed by //."""
        with self.assertRaises(ConninfoParseError) as cm:
            parse("postgresql:host", environ={})
        self.assertIn('missing "//"', cm.exception.message)
        with self.assertRaises(ConninfoParseError):
            parse("postgres:/host", environ={})
