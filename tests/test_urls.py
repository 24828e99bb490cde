import pytest

from inkextrinsics.urls import url_to_string


@pytest.mark.parametrize(
    "url, expected",
    [
        ("ws://127.0.0.1:9944", "ws://127.0.0.1:9944/"),
        ("wss://127.0.0.1:443", "wss://127.0.0.1:443/"),
        ("wss://127.0.0.1:443/test/1", "wss://127.0.0.1:443/test/1"),
        ("wss://test.io:443", "wss://test.io:443/"),
        ("wss://test.io/test/1", "wss://test.io:443/test/1"),
    ],
)
def test_url_to_string_works(url, expected):
    assert url_to_string(url) == expected


def test_default_ws_port_added():
    assert url_to_string("ws://localhost") == "ws://localhost:80/"


def test_default_node_url():
    assert url_to_string("ws://localhost:9944") == "ws://localhost:9944/"


def test_host_is_lowercased():
    assert url_to_string("WSS://Test.IO/a") == "wss://test.io:443/a"


def test_query_is_kept():
    assert url_to_string("https://test.io/x?a=1") == "https://test.io:443/x?a=1"


def test_invalid_url_rejected():
    with pytest.raises(ValueError):
        url_to_string("not a url")


def test_invalid_port_rejected():
    with pytest.raises(ValueError):
        url_to_string("ws://localhost:99999")