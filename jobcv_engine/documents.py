"""Document access: the page wrapper, field locators, and an optional fetcher.

Extractors never touch raw HTML. They get a `JobPage` (parsed tree + URL) and
query it through the locator helpers below. A locator is a CSS selector
string; the helpers try candidates in priority order and treat a malformed or
unsupported selector as a miss, so one bad entry never aborts a lookup.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, List, Optional, Sequence

import httpx
from bs4 import BeautifulSoup, Tag
from bs4.element import PreformattedString
from soupsieve import SelectorSyntaxError

from .settings import get_settings
from .utils import squash_ws

logger = logging.getLogger(__name__)

# Element names whose text never belongs to the posting.
_INVISIBLE = ("script", "style", "noscript", "template")


class JobPage:
    """Read-only view of a job posting document.

    Args:
        root: Parsed tree (a BeautifulSoup object or any bs4 Tag).
        url: Address the page was loaded from; used for URL heuristics.
    """

    def __init__(self, root: Tag, url: str = "") -> None:
        self.root = root
        self.url = url or ""

    @classmethod
    def from_html(cls, html: str, url: str = "", parser: str = "html.parser") -> "JobPage":
        return cls(BeautifulSoup(html or "", parser), url=url)

    @property
    def title(self) -> str:
        """Text of the <title> element, trimmed; empty when missing."""
        node = self.root.find("title")
        return node.get_text(strip=True) if node else ""

    def text(self) -> str:
        """Visible text of the page, one block per line."""
        body = self.root.find("body") or self.root
        return node_text(body, separator="\n")

    def meta(self, selectors: Sequence[str]) -> Optional[str]:
        """Content attribute of the first matching <meta> element with a value."""
        for node in _select_each(self.root, selectors):
            content = (node.get("content") or "").strip()
            if content:
                return content
        return None


def node_text(node: Tag, separator: str = "") -> str:
    """Text content of `node` without script/style content.

    With the default separator the result behaves like DOM `textContent` with
    whitespace collapsed. With "\\n" every text run becomes its own line.
    """
    parts: List[str] = []
    for s in node.find_all(string=True):
        if isinstance(s, PreformattedString):
            continue
        if s.parent is not None and s.parent.name in _INVISIBLE:
            continue
        parts.append(str(s))
    if separator == "\n":
        return "\n".join(p.strip() for p in parts if p.strip())
    return squash_ws(separator.join(parts))


def raw_text(node: Tag) -> str:
    """Text content of `node` with original line breaks kept (no collapsing)."""
    return "".join(
        str(s)
        for s in node.find_all(string=True)
        if not isinstance(s, PreformattedString)
        and not (s.parent is not None and s.parent.name in _INVISIBLE)
    )


def _safe_select(root: Tag, locator: str) -> List[Tag]:
    try:
        return root.select(locator)
    except (SelectorSyntaxError, NotImplementedError, ValueError, TypeError) as exc:
        logger.debug("Skipping unusable locator %r: %s", locator, exc)
        return []


def _select_each(root: Tag, locators: Iterable[str]) -> Iterable[Tag]:
    for locator in locators:
        for node in locate_all(root, locator):
            yield node


def locate_node(root: Tag, candidates: Sequence[str]) -> Optional[Tag]:
    """Return the first node, in candidate order, that has non-empty text."""
    for locator in candidates:
        for node in _safe_select(root, locator):
            if node_text(node):
                return node
    return None


def locate(root: Tag, candidates: Sequence[str]) -> Optional[str]:
    """Return the trimmed text of the first matching node, or None."""
    node = locate_node(root, candidates)
    if node is None:
        return None
    return node_text(node) or None


def locate_all(root: Tag, locator: str) -> List[Tag]:
    """All nodes matching a single locator; empty on an unusable locator."""
    return _safe_select(root, locator)


def fetch_page(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout_s: Optional[float] = None,
    max_retries: Optional[int] = None,
    backoff_s: Optional[float] = None,
) -> JobPage:
    """Download `url` and wrap it as a `JobPage`.

    HTTP 429 responses are retried with exponential backoff; every other HTTP
    error propagates as `httpx.HTTPStatusError`. Pass `client` to reuse a
    connection pool (or a mocked transport in tests).
    """
    settings = get_settings()
    timeout_s = settings.http_timeout_s if timeout_s is None else timeout_s
    max_retries = settings.http_max_retries if max_retries is None else max_retries
    backoff_s = settings.http_backoff_s if backoff_s is None else backoff_s

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout_s, follow_redirects=True)
    try:
        retries = 0
        while True:
            try:
                resp = client.get(url)
                resp.raise_for_status()
                break
            except httpx.HTTPStatusError as exc:
                if exc.response.status_code == 429 and retries < max_retries:
                    sleep_s = backoff_s * (2**retries)
                    logger.warning("Rate limited by %s, retrying in %.1fs", url, sleep_s)
                    time.sleep(sleep_s)
                    retries += 1
                    continue
                raise
    finally:
        if owns_client:
            client.close()

    logger.info("Fetched %s (%d bytes)", url, len(resp.content))
    return JobPage.from_html(resp.text, url=str(resp.url))
