"""
Tests for endpoint descriptors and parameter encoding.
"""

import dataclasses

import pytest

from bucko import Endpoint, HTTPMethod, ParameterEncoding
from bucko.endpoint import default_encoding, encodes_in_query
from bucko.utils.query import encode_parameters, query_components

from .conftest import API


class TestEndpoint:
    """Test endpoint construction."""

    @pytest.mark.parametrize(
        "base_url, path, expected",
        [
            ("https://api.example.com", "/users", "https://api.example.com/users"),
            ("https://api.example.com/", "/users", "https://api.example.com//users"),
            ("https://api.example.com", "users", "https://api.example.comusers"),
            ("https://api.example.com/v1", "", "https://api.example.com/v1"),
        ],
    )
    def test_full_url_is_plain_concatenation(self, base_url, path, expected):
        """Test full URL joins base and path verbatim."""
        assert Endpoint(base_url, path).full_url == expected

    def test_defaults(self):
        """Test default method, parameters, headers and encoding."""
        endpoint = Endpoint(API, "/users")

        assert endpoint.method is HTTPMethod.GET
        assert dict(endpoint.parameters) == {}
        assert dict(endpoint.headers) == {}
        assert endpoint.encoding is ParameterEncoding.URL

    def test_method_string_is_coerced(self):
        """Test lowercase method strings are accepted."""
        endpoint = Endpoint(API, "/users", method="post")

        assert endpoint.method is HTTPMethod.POST
        assert endpoint.encoding is ParameterEncoding.JSON

    @pytest.mark.parametrize(
        "method, encoding",
        [
            (HTTPMethod.GET, ParameterEncoding.URL),
            (HTTPMethod.HEAD, ParameterEncoding.URL),
            (HTTPMethod.DELETE, ParameterEncoding.URL),
            (HTTPMethod.POST, ParameterEncoding.JSON),
            (HTTPMethod.PUT, ParameterEncoding.JSON),
            (HTTPMethod.PATCH, ParameterEncoding.JSON),
        ],
    )
    def test_default_encoding_follows_method(self, method, encoding):
        """Test encoding derived from the method."""
        assert default_encoding(method) is encoding
        assert Endpoint(API, method=method).encoding is encoding

    def test_explicit_encoding_wins(self):
        """Test an explicit encoding is kept."""
        endpoint = Endpoint(API, "/login", method="POST", encoding="url")

        assert endpoint.encoding is ParameterEncoding.URL

    def test_headers_are_case_insensitive(self):
        """Test header lookups ignore case."""
        endpoint = Endpoint(API, headers={"Authorization": "Bearer token"})

        assert endpoint.headers["authorization"] == "Bearer token"
        assert endpoint.headers["AUTHORIZATION"] == "Bearer token"

    def test_endpoint_is_immutable(self):
        """Test fields, parameters and headers cannot be changed."""
        source = {"page": 1}
        endpoint = Endpoint(
            API, "/users", parameters=source, headers={"Authorization": "Bearer t"}
        )

        with pytest.raises(dataclasses.FrozenInstanceError):
            endpoint.path = "/admins"

        with pytest.raises(TypeError):
            endpoint.parameters["page"] = 2

        with pytest.raises(TypeError):
            endpoint.headers["Authorization"] = "Bearer other"
        assert endpoint.headers["authorization"] == "Bearer t"

        source["page"] = 3
        assert endpoint.parameters["page"] == 1

    def test_no_validation_at_construction(self):
        """Test malformed URLs are accepted until sent."""
        endpoint = Endpoint("not a url", "/anywhere")

        assert endpoint.full_url == "not a url/anywhere"

    def test_replace(self):
        """Test copies with changed fields."""
        endpoint = Endpoint(API, "/users", parameters={"page": 1})

        other = endpoint.with_path("/admins")
        assert other.full_url == API + "/admins"
        assert other.parameters["page"] == 1
        assert endpoint.path == "/users"

        posted = endpoint.replace(method="PUT")
        assert posted.method is HTTPMethod.PUT
        assert posted.encoding is ParameterEncoding.JSON

    def test_hashable(self):
        """Test endpoints can be used as dictionary keys."""
        first = Endpoint(API, "/a", parameters={"page": 1}, headers={"X-A": "1"})
        second = Endpoint(API, "/a", parameters={"page": 1}, headers={"x-a": "1"})

        assert hash(first) == hash(second)
        assert {first: "cached"}[second] == "cached"

    def test_equality(self):
        """Test endpoints compare by value."""
        assert Endpoint(API, "/a", headers={"X-A": "1"}) == Endpoint(
            API, "/a", headers={"x-a": "1"}
        )
        assert Endpoint(API, "/a") != Endpoint(API, "/b")


class TestQueryEncoding:
    """Test URL parameter flattening."""

    def test_encodes_in_query(self):
        """Test where URL encoding puts parameters."""
        assert encodes_in_query(HTTPMethod.GET, ParameterEncoding.URL)
        assert encodes_in_query(HTTPMethod.DELETE, ParameterEncoding.URL)
        assert not encodes_in_query(HTTPMethod.POST, ParameterEncoding.URL)
        assert encodes_in_query(HTTPMethod.POST, ParameterEncoding.QUERY_STRING)
        assert not encodes_in_query(HTTPMethod.GET, ParameterEncoding.HTTP_BODY)
        assert not encodes_in_query(HTTPMethod.GET, ParameterEncoding.JSON)

    def test_nested_values(self):
        """Test dictionaries and lists use bracket keys."""
        components = query_components(
            "user", {"name": "ada", "tags": ["a", "b"], "address": {"city": "Paris"}}
        )

        assert components == [
            ("user[address][city]", "Paris"),
            ("user[name]", "ada"),
            ("user[tags][]", "a"),
            ("user[tags][]", "b"),
        ]

    def test_scalars(self):
        """Test booleans, None and numbers."""
        assert query_components("on", True) == [("on", "1")]
        assert query_components("off", False) == [("off", "0")]
        assert query_components("empty", None) == [("empty", "")]
        assert query_components("n", 2.5) == [("n", "2.5")]

    def test_keys_sorted(self):
        """Test top-level keys are emitted in sorted order."""
        assert encode_parameters({"b": 2, "a": 1}) == [("a", "1"), ("b", "2")]
