"""Unit tests for urlcraft.http.query module."""

import pytest

from urlcraft.exceptions import InvalidInputError, QueryValidationError, ValidationError
from urlcraft.http.query import Encoded, Query, decode, encode


class TestQuery:
    """Tests for Query class."""

    def test_init_empty(self):
        """Test Query initialization with no arguments."""
        query = Query()
        assert len(query) == 0
        assert query.multi_items() == []

    def test_init_with_dict(self):
        """Test Query initialization from a dict keeps insertion order."""
        query = Query({"b": "2", "a": "1"})
        assert list(query) == ["b", "a"]
        assert query.multi_items() == [("b", "2"), ("a", "1")]

    def test_duplicates_preserved(self):
        """Test that repeated names keep every value in order."""
        query = Query([("a", "1"), ("b", "2"), ("a", "3")])
        assert query["a"] == "1"
        assert query.get_all("a") == ["1", "3"]
        assert query.multi_items() == [("a", "1"), ("b", "2"), ("a", "3")]
        assert len(query) == 2
        assert list(query) == ["a", "b"]

    def test_get_all_missing(self):
        """Test get_all() returns an empty list for a missing name."""
        assert Query([("a", "1")]).get_all("z") == []

    def test_getitem_raises_keyerror(self):
        """Test __getitem__ raises KeyError for missing name."""
        with pytest.raises(KeyError):
            _ = Query()["missing"]

    def test_get_default(self):
        """Test Mapping.get() falls back to the default."""
        query = Query([("a", "1")])
        assert query.get("a") == "1"
        assert query.get("b", "x") == "x"

    def test_equality(self):
        """Test equality against other queries and plain dicts."""
        assert Query({"a": "1"}) == Query([("a", "1")])
        assert Query([("a", "1"), ("a", "2")]) != Query([("a", "1")])
        assert Query([("a", "1"), ("b", "2")]) == {"a": "1", "b": "2"}
        assert Query([("a", "1")]) != {"a": "2"}

    def test_copy_from_query(self):
        """Test building a Query from another keeps duplicates."""
        original = Query([("a", "1"), ("a", "2")])
        assert Query(original).multi_items() == original.multi_items()

    def test_repr(self):
        """Test the repr lists every pair."""
        assert repr(Query([("a", "1"), ("a", "2")])) == "Query([('a', '1'), ('a', '2')])"

    def test_is_immutable(self):
        """Test that items cannot be assigned."""
        query = Query([("a", "1")])
        with pytest.raises(TypeError):
            query["a"] = "2"  # type: ignore[index]


class TestEncoded:
    """Tests for the Encoded marker."""

    def test_is_str(self):
        """Test Encoded values behave as strings."""
        value = Encoded("a%2Fb")
        assert isinstance(value, str)
        assert value == "a%2Fb"

    def test_repr(self):
        """Test the repr shows the marker."""
        assert repr(Encoded("x")) == "Encoded('x')"


class TestDecode:
    """Tests for decode()."""

    def test_basic(self):
        """Test decoding keeps pair order."""
        query = decode("a=1&b=2&c=3")
        assert query == {"a": "1", "b": "2", "c": "3"}
        assert list(query) == ["a", "b", "c"]

    @pytest.mark.parametrize("text", ["", "?", "&", "&&", " & "])
    def test_no_pairs(self, text):
        """Test that strings without pairs decode to None."""
        assert decode(text) is None

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("?a=1", [("a", "1")]),
            ("a", [("a", "")]),
            ("a=", [("a", "")]),
            ("=1", [("", "1")]),
            ("a=1=2", [("a", "1=2")]),
            ("a=1&&b=2", [("a", "1"), ("b", "2")]),
            (" a = 1 ", [("a", "1")]),
            ("a=%20b%2Fc", [("a", " b/c")]),
            ("a=b+c", [("a", "b+c")]),
            ("%61%20b=1", [("a b", "1")]),
            ("q=caf%C3%A9", [("q", "café")]),
            ("a=%zz", [("a", "%zz")]),
            ("a=1&b=2&a=3", [("a", "1"), ("b", "2"), ("a", "3")]),
        ],
    )
    def test_pairs(self, text, expected):
        """Test splitting and percent-decoding of pairs."""
        assert decode(text).multi_items() == expected

    def test_rejects_non_string(self):
        """Test that non-string input raises InvalidInputError."""
        with pytest.raises(InvalidInputError, match="`query`"):
            decode(None)  # type: ignore[arg-type]


class TestEncode:
    """Tests for encode()."""

    def test_basic(self):
        """Test encoding numbers in input order."""
        assert encode({"a": 1, "b": 2, "c": 3}) == "a=1&b=2&c=3"

    def test_empty(self):
        """Test that an empty mapping encodes to None."""
        assert encode({}) is None
        assert encode(Query()) is None
        assert encode([]) is None

    def test_escapes_names_and_values(self):
        """Test that reserved characters are percent-encoded."""
        assert encode({"a b": "c/d", "k": "~-._", "e": "x&y=z"}) == (
            "a%20b=c%2Fd&k=~-._&e=x%26y%3Dz"
        )

    def test_escapes_unicode(self):
        """Test that non-ASCII text is encoded as UTF-8."""
        assert encode({"q": "café"}) == "q=caf%C3%A9"

    def test_encoded_value_verbatim(self):
        """Test that Encoded values are not escaped."""
        assert encode({"a": Encoded("x/y?z&w"), "b": "x/y"}) == "a=x/y?z&w&b=x%2Fy"

    def test_encoded_value_in_list(self):
        """Test that a one-element list holding Encoded is still verbatim."""
        assert encode({"a": [Encoded("%2F")]}) == "a=%2F"

    def test_safe(self):
        """Test extra safe characters."""
        assert encode({"p": "a/b c"}, safe="/") == "p=a/b%20c"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (2.0, "2"),
            (1.5, "1.5"),
            (1e20, "100000000000000000000"),
            (1e-7, "0.0000001"),
            ("", ""),
        ],
    )
    def test_scalar_formatting(self, value, expected):
        """Test that scalars are written in plain notation."""
        assert encode({"v": value}) == f"v={expected}"

    def test_drops_absent_values(self):
        """Test that None and empty sequences are dropped."""
        assert encode({"a": None, "b": 1, "c": [], "d": ()}) == "b=1"
        assert encode({"a": None}) is None

    def test_unwraps_single_item(self):
        """Test that a one-element list stands for its item."""
        assert encode({"a": [5], "b": ("x",)}) == "a=5&b=x"

    def test_two_element_value(self):
        """Test that a two-element value raises naming the key."""
        with pytest.raises(ValidationError, match="Problems: b") as exc_info:
            encode({"a": 1, "b": [1, 2]})
        assert isinstance(exc_info.value, QueryValidationError)
        assert exc_info.value.keys == ("b",)

    def test_lists_every_bad_key(self):
        """Test that all offending keys are reported."""
        with pytest.raises(QueryValidationError, match="Problems: a, c"):
            encode({"a": [1, 2], "b": 1, "c": {"x": 1}})

    def test_non_finite_number(self):
        """Test that NaN is rejected."""
        with pytest.raises(QueryValidationError, match="finite") as exc_info:
            encode({"n": float("nan")})
        assert exc_info.value.keys == ("n",)

    @pytest.mark.parametrize("value", [[1, 2], ("a",), "a=1", 5, None])
    def test_not_a_mapping(self, value):
        """Test that non-mapping input raises ValidationError."""
        with pytest.raises(ValidationError, match="Query must be a mapping"):
            encode(value)

    def test_non_string_names(self):
        """Test that non-string names raise ValidationError."""
        with pytest.raises(ValidationError, match="Query names must be strings: 1"):
            encode({1: "a"})

    def test_query_keeps_duplicates(self):
        """Test that encoding a decoded Query keeps repeated names."""
        assert encode(decode("a=1&a=2")) == "a=1&a=2"

    def test_decode_encode_canonical(self):
        """Test that decoding then encoding canonicalises escapes."""
        assert encode(decode("a=b+c&d=%7e")) == "a=b%2Bc&d=~"
