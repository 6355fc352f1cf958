"""
Tests for RawTap Request Builder

Tests conversion of RequestConfig into requests.Request including:
- Query string encoding from form params
- Header copying and Content-Type forcing
- Verbatim body bytes
"""

import io

import pytest
import requests

from src.rawtap.common import RequestFormatError
from src.rawtap.replay.builder import RequestBuilder
from src.rawtap.template.models import RequestConfig
from src.rawtap.template.parser import RawRequestParser


@pytest.fixture
def builder():
    """Fresh builder."""
    return RequestBuilder()


class TestBuildUrl:
    """Test final URL construction."""

    def test_no_params(self, builder):
        """Test that the base URL is used when there are no params."""
        config = RequestConfig(url='http://h/p')

        assert builder.build_url(config) == 'http://h/p'

    def test_params_encoded_into_query(self, builder):
        """Test that form params become the query string, sorted by key."""
        config = RequestConfig(url='http://h/p', params={'b': '2', 'a': '1'})

        assert builder.build_url(config) == 'http://h/p?a=1&b=2'

    def test_params_are_encoded(self, builder):
        """Test that param values are URL-encoded on the way out."""
        config = RequestConfig(url='http://h/p', params={'q': 'a b&c'})

        assert builder.build_url(config) == 'http://h/p?q=a+b%26c'

    def test_parsed_query_not_reattached(self, builder):
        """Test that the query mapping from the request line is not sent."""
        config = RequestConfig(url='http://h/p', query={'page': '2'})

        assert builder.build_url(config) == 'http://h/p'


class TestBuildHeaders:
    """Test outgoing headers."""

    def test_headers_copied(self, builder):
        """Test that every header is copied."""
        config = RequestConfig(headers={'Host': 'h', 'X-Token': 'abc'})

        assert builder.build_headers(config) == {'Host': b'h', 'X-Token': b'abc'}

    def test_content_type_forced(self, builder):
        """Test that Content-Type is set from the parsed content type."""
        config = RequestConfig(
            content_type='application/json',
            headers={'Content-Type': 'application/json', 'content-type': 'text/plain'}
        )

        headers = builder.build_headers(config)

        assert headers == {'Content-Type': b'application/json'}

    def test_no_content_type(self, builder):
        """Test that no Content-Type is added when none was parsed."""
        config = RequestConfig(headers={'Host': 'h'})

        assert 'Content-Type' not in builder.build_headers(config)

    def test_config_headers_untouched(self, builder):
        """Test that building does not mutate the config."""
        config = RequestConfig(content_type='text/plain', headers={'content-type': 'text/html'})

        builder.build_headers(config)

        assert config.headers == {'content-type': 'text/html'}


class TestBuild:
    """Test full request building."""

    def test_build_request(self, builder):
        """Test building a request object."""
        config = RequestConfig(
            method='POST',
            url='http://h/login',
            content_type='application/x-www-form-urlencoded',
            headers={'Host': 'h'},
            params={'user': 'alice'},
            raw_body='user=alice'
        )

        request = builder.build(config)

        assert isinstance(request, requests.Request)
        assert request.method == 'POST'
        assert request.url == 'http://h/login?user=alice'
        assert request.headers['Content-Type'] == b'application/x-www-form-urlencoded'
        assert request.data == b'user=alice'

    def test_prepared_body_verbatim(self, builder):
        """Test that the prepared body is exactly the raw body bytes."""
        config = RequestConfig(
            method='PUT',
            url='http://h/doc',
            content_type='application/json',
            raw_body='{"name": "Zoë"}'
        )

        prepared = builder.build(config).prepare()

        assert prepared.body == '{"name": "Zoë"}'.encode('utf-8')
        assert prepared.headers['Content-Type'] == b'application/json'
        assert prepared.headers['Content-Length'] == str(len(prepared.body))

    def test_binary_body_round_trip(self, builder):
        """Test that undecodable bytes from the file are sent unchanged."""
        parser = RawRequestParser()
        config = parser.parse(io.BytesIO(b"POST /bin HTTP/1.1\nHost: h\n\n\x89PNG\xff"))

        request = builder.build(config)

        assert request.data == b"\x89PNG\xff"

    def test_parsed_request_to_prepared(self, builder):
        """Test building straight from a parsed request file."""
        parser = RawRequestParser(scheme='https')
        config = parser.parse(io.BytesIO(
            b"GET /search?q=old HTTP/1.1\n"
            b"Host: api.example.com\n"
            b"Accept: application/json\n\n"
        ))

        prepared = builder.build(config).prepare()

        assert prepared.method == 'GET'
        assert prepared.url == 'https://api.example.com/search'
        assert prepared.headers['Host'] == b'api.example.com'
        assert prepared.headers['Accept'] == b'application/json'


class TestHeaderEncoding:
    """Test header values outside Latin-1."""

    def test_utf8_header_value_sent_as_bytes(self, builder):
        """Test that UTF-8 header values are encoded, not left for Latin-1."""
        config = RequestConfig(headers={'X-Name': '日本'})

        headers = builder.build_headers(config)

        assert headers['X-Name'] == '日本'.encode('utf-8')

    def test_undecodable_header_bytes_round_trip(self, builder):
        """Test that raw header bytes from the file are sent unchanged."""
        parser = RawRequestParser()
        config = parser.parse(io.BytesIO(b"GET / HTTP/1.1\nHost: h\nX-Raw: a\xffb\n\n"))

        headers = builder.build_headers(config)

        assert headers['X-Raw'] == b'a\xffb'

    def test_utf8_filename_prepares(self, builder):
        """Test that a non-ASCII Content-Disposition survives preparation."""
        config = RequestConfig(
            method='POST',
            url='http://h/upload',
            headers={'Content-Disposition': 'attachment; filename="résumé.pdf"'}
        )

        prepared = builder.build(config).prepare()

        assert prepared.headers['Content-Disposition'] == 'attachment; filename="résumé.pdf"'.encode('utf-8')

    def test_non_ascii_header_name(self, builder):
        """Test that a header name outside ASCII is a format error."""
        config = RequestConfig(headers={'X-Näme': 'v'})

        with pytest.raises(RequestFormatError) as exc_info:
            builder.build_headers(config)

        assert exc_info.value.fragment == 'X-Näme'
