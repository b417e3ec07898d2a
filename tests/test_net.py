from datetime import datetime, timezone

import pytest
import requests

from chan_tui.net import ApiClient, FetchError
from chan_tui.watchlist import UNIX_EPOCH


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=b""):
        self.status_code = status_code
        self._payload = payload
        self.content = content

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, responses):
        self.headers = {}
        self.responses = dict(responses)
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers, timeout))
        resp = self.responses[url]
        if isinstance(resp, Exception):
            raise resp
        return resp


def make_client(responses):
    session = FakeSession(responses)
    client = ApiClient(
        api_base="https://api.test/",
        image_base="https://img.test",
        user_agent="tests",
        connect_timeout=1.0,
        read_timeout=2.0,
        session=session,
    )
    return client, session


def test_user_agent_and_timeout():
    client, session = make_client({"https://api.test/boards.json": FakeResponse(payload={"boards": []})})
    client.load_boards()
    assert session.headers["User-Agent"] == "tests"
    assert session.calls[0][2] == (1.0, 2.0)


def test_thumbnail_url():
    client, _ = make_client({})
    assert client.thumbnail_url("g", 1546293948883) == "https://img.test/g/1546293948883s.jpg"


def test_get_thumbnail_returns_bytes():
    client, _ = make_client({"https://img.test/g/5s.jpg": FakeResponse(content=b"\xff\xd8")})
    assert client.get_thumbnail("g", 5) == b"\xff\xd8"


def test_get_thumbnail_404():
    client, _ = make_client({"https://img.test/g/5s.jpg": FakeResponse(status_code=404)})
    with pytest.raises(FetchError):
        client.get_thumbnail("g", 5)


def test_connection_error_becomes_fetch_error():
    client, _ = make_client({"https://api.test/boards.json": requests.ConnectionError("down")})
    with pytest.raises(FetchError):
        client.load_boards()


def test_bad_json_becomes_fetch_error():
    client, _ = make_client({"https://api.test/boards.json": FakeResponse(payload=None)})
    with pytest.raises(FetchError):
        client.load_boards()


def test_threads_for_board_reads_first_page():
    catalog = [
        {"page": 1, "threads": [
            {"no": 1, "resto": 0, "time": 0, "replies": 3, "images": 1, "sub": "first", "tim": 11},
            {"no": 2, "resto": 0, "time": 0, "replies": 0, "images": 0},
        ]},
        {"page": 2, "threads": [{"no": 3, "resto": 0, "time": 0, "replies": 0, "images": 0}]},
    ]
    client, _ = make_client({"https://api.test/g/catalog.json": FakeResponse(payload=catalog)})
    posts = client.get_threads_for_board("g")
    assert [p.no for p in posts] == [1, 2]
    assert posts[0].subject == "first"
    assert posts[0].attachment.tim == 11
    assert posts[1].attachment is None


def test_empty_catalog():
    client, _ = make_client({"https://api.test/g/catalog.json": FakeResponse(payload=[])})
    assert client.get_threads_for_board("g") == []


def test_get_thread_sends_if_modified_since():
    url = "https://api.test/g/thread/47357.json"
    client, session = make_client({url: FakeResponse(payload={"posts": [{"no": 47357, "resto": 0, "time": 0}]})})
    thread = client.get_thread("g", "47357", since=UNIX_EPOCH)
    assert [p.no for p in thread.posts] == [47357]
    assert session.calls[0][1] == {"If-Modified-Since": "Thu, 01 Jan 1970 00:00:00 GMT"}


def test_get_thread_without_since_sends_no_header():
    url = "https://api.test/g/thread/1.json"
    client, session = make_client({url: FakeResponse(payload={"posts": []})})
    client.get_thread("g", "1")
    assert session.calls[0][1] == {}


def test_get_thread_not_modified():
    url = "https://api.test/g/thread/1.json"
    client, _ = make_client({url: FakeResponse(status_code=304)})
    assert client.get_thread("g", "1", since=datetime(2024, 5, 1, tzinfo=timezone.utc)) is None


def test_get_thread_empty_body():
    url = "https://api.test/g/thread/1.json"
    client, _ = make_client({url: FakeResponse(payload=None)})
    assert client.get_thread("g", "1") is None


def test_get_thread_error_status():
    url = "https://api.test/g/thread/1.json"
    client, _ = make_client({url: FakeResponse(status_code=404)})
    with pytest.raises(FetchError):
        client.get_thread("g", "1")
