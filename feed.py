import logging
from typing import Optional
from urllib.parse import urljoin

import feedparser
import requests
from bs4 import BeautifulSoup
from markupsafe import escape

from models import Feed, FeedItem

# Parameters
MAX_ITEMS = 5  # Number of feed entries shown on the page
MAX_DESCRIPTION_LENGTH = 300  # Max length of an entry description
FALLBACK_FEED_DOCUMENT = "rss2.xml"
FEED_LINK_TYPES = ("application/rss+xml", "application/atom+xml")

# Networking
# Use short connect timeout and reasonable read timeout to avoid hangs
DEFAULT_TIMEOUT = (5, 15)


def clean_html(html_content: str | bytes | None) -> str:
    if html_content is None:
        return ""
    try:
        text = (
            html_content.decode("utf-8", errors="ignore")
            if isinstance(html_content, (bytes, bytearray))
            else str(html_content)
        )
        soup = BeautifulSoup(text, "html.parser")
        return soup.get_text()
    except Exception as e:
        logging.error(f"Failed to clean HTML: {e}")
        return ""


def fetch_document(url: str) -> Optional[bytes]:
    try:
        response = requests.get(url, timeout=DEFAULT_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logging.error(f"Failed to fetch {url}: {e}")
        return None
    if response.status_code != 200:
        logging.error(f"Failed to fetch {url}: {response.status_code}")
        return None
    return response.content


def discover_feed_url(page_url: str, html_content: bytes) -> str:
    """Find the feed advertised by an HTML page.

    Looks for a ``<link rel="alternate">`` pointing at an RSS or Atom
    document. Pages without one get the ``rss2.xml`` next to them.
    """
    soup = BeautifulSoup(html_content, "html.parser")
    for link in soup.find_all("link", href=True):
        rel = link.get("rel") or []
        if "alternate" in rel and link.get("type", "").lower() in FEED_LINK_TYPES:
            return urljoin(page_url, link["href"])
    return urljoin(page_url, FALLBACK_FEED_DOCUMENT)


def parse_feed(url: str, content: bytes) -> Optional[Feed]:
    parsed = feedparser.parse(content)
    # Feeds with no entries still have a version; HTML pages do not
    if not parsed.get("version") and not parsed.entries:
        return None
    feed = Feed(url=url, title=parsed.feed.get("title", ""))
    for entry in parsed.entries:
        feed.items.append(
            FeedItem(
                title=entry.get("title", ""),
                link=entry.get("link", ""),
                published=entry.get("published") or entry.get("updated", ""),
                description=entry.get("summary", ""),
            )
        )
    return feed


def fetch_feed(url: str) -> Optional[Feed]:
    content = fetch_document(url)
    if content is None:
        return None

    feed = parse_feed(url, content)
    if feed is not None:
        return feed

    # Not a feed itself; assume a site page and look for its feed
    feed_url = discover_feed_url(url, content)
    logging.info(f"No feed at {url}. Trying {feed_url}...")
    content = fetch_document(feed_url)
    if content is None:
        return None
    feed = parse_feed(feed_url, content)
    if feed is None:
        logging.error(f"No feed found at {feed_url}")
    return feed


def render_rows(feed: Feed) -> str:
    rows = []
    for item in feed.items[:MAX_ITEMS]:
        description = clean_html(item.description).strip()

        # Truncate description if necessary
        if len(description) > MAX_DESCRIPTION_LENGTH:
            description = description[:MAX_DESCRIPTION_LENGTH] + "..."

        cell = f'<a href="{escape(item.link)}">{escape(item.title)}</a>'
        if item.published:
            cell += f" <small>{escape(item.published)}</small>"
        if description:
            cell += f"<br />{escape(description)}"
        rows.append(f'<tr><td colspan="2">{cell}</td></tr>\n')
    return "".join(rows)


def publish_html(url: str) -> str:
    """Render the feed behind ``url`` as rows for the download table.

    Returns an empty string when the feed can't be fetched or parsed.
    """
    feed = fetch_feed(url)
    if feed is None:
        logging.error(f"No feed to publish for {url}")
        return ""
    logging.info(f"{len(feed.items)} items found for {feed.url} - {feed.title}")
    return render_rows(feed)
