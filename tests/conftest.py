"""Shared fixtures for feedstore tests."""

from pathlib import Path

import pytest

from feedstore.store.store import FeedStore
from feedstore.utils.errors import FetchError

APNIC_FEED = "https://blog.apnic.net/feed/"

SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>APNIC Blog</title>
    <atom:link href="https://blog.apnic.net/feed/" rel="self" type="application/rss+xml" />
    <link>https://blog.apnic.net</link>
    <description>Asia Pacific Network Information Centre</description>
    <item>
      <title>Measuring IPv6 adoption</title>
      <link>https://blog.apnic.net/2024/01/01/ipv6/</link>
      <content:encoded><![CDATA[<p>IPv6 is <b>growing</b>.</p>]]></content:encoded>
    </item>
    <item>
      <title>RPKI in 2024</title>
      <link>https://blog.apnic.net/2024/02/01/rpki/</link>
    </item>
  </channel>
</rss>
"""

SAMPLE_ATOM = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Atom Feed</title>
  <subtitle>Things happen here</subtitle>
  <link href="https://example.org/" />
  <link href="https://example.org/atom.xml" rel="self" />
  <id>urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6</id>
  <updated>2024-03-01T12:00:00Z</updated>
  <entry>
    <title>First post</title>
    <link href="https://example.org/first" />
    <id>urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6a</id>
    <updated>2024-03-01T12:00:00Z</updated>
  </entry>
</feed>
"""

PLAIN_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>No Self Link</title>
    <link>https://plain.example.com</link>
    <description>An RSS feed without an atom block</description>
    <item><title>Only item</title></item>
  </channel>
</rss>
"""


def rss_with_self_link(href: str, title: str = "Linked Feed") -> bytes:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>{title}</title>
    <atom:link href="{href}" rel="self" type="application/rss+xml" />
    <link>https://example.com</link>
    <description>Feed with a self link</description>
  </channel>
</rss>
""".encode()


class StubFetcher:
    """Fetcher serving canned bodies; unknown URLs fail like a 404."""

    def __init__(self, responses: dict[str, bytes | Exception] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        body = self.responses.get(url)
        if body is None:
            raise FetchError(f"Failed to fetch {url}: HTTP 404", url=url, status_code=404)
        if isinstance(body, Exception):
            raise body
        return body

    def close(self) -> None:
        pass


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    """Fetcher that knows the APNIC feed and a plain RSS feed."""
    return StubFetcher(
        {
            APNIC_FEED: SAMPLE_RSS,
            "https://plain.example.com/rss": PLAIN_RSS,
            "https://example.org/atom.xml": SAMPLE_ATOM,
        }
    )


@pytest.fixture
def store(stub_fetcher: StubFetcher) -> FeedStore:
    """Empty store wired to the stub fetcher."""
    return FeedStore(fetcher=stub_fetcher)  # type: ignore[arg-type]


@pytest.fixture
def rss_file(tmp_path: Path) -> Path:
    """RSS document on disk with an atom:link self-link."""
    path = tmp_path / "example.xml"
    path.write_bytes(rss_with_self_link("https://example.com/feed"))
    return path
