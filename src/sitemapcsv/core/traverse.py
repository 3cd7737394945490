# SitemapCSV — Core traversal (depth-first sitemap walk, dedup, per-node isolation)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .document import DocumentKind, DocumentParseError, ParsedDocument, parse_document
from .fetch import FetchError


logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 200


class NodeOutcome(str, enum.Enum):
	INDEX = "index"
	URLSET = "urlset"
	SKIPPED = "skipped"
	EMPTY = "empty"
	UNRECOGNIZED = "unrecognized"
	FETCH_FAILED = "fetch_failed"
	PARSE_FAILED = "parse_failed"


FAILURE_OUTCOMES = frozenset({NodeOutcome.FETCH_FAILED, NodeOutcome.PARSE_FAILED})
WARNING_OUTCOMES = frozenset({NodeOutcome.EMPTY, NodeOutcome.UNRECOGNIZED})


@dataclass
class NodeResult:
	url: str
	outcome: NodeOutcome
	count: int = 0
	error: str = ""

	@property
	def ok(self) -> bool:
		return self.outcome not in FAILURE_OUTCOMES


class CrawlSession:
	"""Accumulators for one crawl: visited sitemaps, discovered pages, node results.

	Thread-safe; mark_visited is a single check-and-insert.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self.visited: Set[str] = set()
		self._pages: Dict[str, None] = {}
		self.results: List[NodeResult] = []

	def mark_visited(self, url: str) -> bool:
		"""Insert url into visited. False when it was already there."""
		with self._lock:
			if url in self.visited:
				return False
			self.visited.add(url)
			return True

	def add_page(self, url: str) -> bool:
		with self._lock:
			if url in self._pages:
				return False
			self._pages[url] = None
			return True

	def record(self, result: NodeResult) -> None:
		with self._lock:
			self.results.append(result)

	@property
	def discovered(self) -> List[str]:
		"""Page URLs in first-discovery order."""
		with self._lock:
			return list(self._pages)

	@property
	def failures(self) -> List[NodeResult]:
		with self._lock:
			return [r for r in self.results if r.outcome in FAILURE_OUTCOMES]

	@property
	def warnings(self) -> List[NodeResult]:
		with self._lock:
			return [r for r in self.results if r.outcome in WARNING_OUTCOMES]


class SitemapCrawler:
	"""Depth-first sitemap traversal that never lets one document's failure escape it.

	``fetcher`` needs a ``fetch(url) -> str`` method raising :class:`FetchError`;
	``parser`` turns text into a :class:`ParsedDocument` or raises
	:class:`DocumentParseError`.
	"""

	def __init__(self, fetcher, parser: Callable[[str], ParsedDocument] = parse_document) -> None:
		self.fetcher = fetcher
		self.parser = parser

	def crawl(self, entry_urls: Iterable[str], session: Optional[CrawlSession] = None) -> CrawlSession:
		session = session if session is not None else CrawlSession()
		for url in entry_urls:
			self.traverse(url, session)
		return session

	def traverse(self, url: str, session: CrawlSession) -> NodeResult:
		"""Process url and its whole subtree; returns the result for url itself.

		Children run in document order, each subtree finishing before the next
		sibling starts. The walk uses its own stack, so nesting depth is bounded
		by the number of distinct sitemaps and not by the interpreter.
		"""
		first: Optional[NodeResult] = None
		stack: List[str] = [url]
		while stack:
			current = stack.pop()
			result, children = self._visit(current, session)
			session.record(result)
			if first is None:
				first = result
			# reversed so the first child is popped next
			stack.extend(reversed(children))
		return first

	def _visit(self, url: str, session: CrawlSession) -> Tuple[NodeResult, List[str]]:
		if not session.mark_visited(url):
			logger.debug("Sitemap already visited: %s", url)
			return NodeResult(url, NodeOutcome.SKIPPED), []

		try:
			text = self.fetcher.fetch(url)
		except FetchError as e:
			logger.error("Error processing sitemap %s: %s", url, e.message)
			return NodeResult(url, NodeOutcome.FETCH_FAILED, error=str(e)), []

		try:
			doc = self.parser(text)
		except DocumentParseError as e:
			logger.error("Error processing sitemap %s: %s", url, e.message)
			return NodeResult(url, NodeOutcome.PARSE_FAILED, error=e.message), []

		if doc.kind is DocumentKind.INDEX:
			logger.info("Processing sitemap index: %s (%d sitemaps)", url, len(doc.locations))
			return NodeResult(url, NodeOutcome.INDEX, count=len(doc.locations)), list(doc.locations)

		if doc.kind is DocumentKind.URLSET:
			logger.info("Processing URL set: %s (%d urls)", url, len(doc.locations))
			for loc in doc.locations:
				session.add_page(loc)
			return NodeResult(url, NodeOutcome.URLSET, count=len(doc.locations)), []

		snippet = text[:SNIPPET_LENGTH]
		if doc.empty:
			logger.warning("Empty sitemap (<%s> without entries) at %s. Content snippet: %s", doc.root, url, snippet)
			return NodeResult(url, NodeOutcome.EMPTY), []
		logger.warning("Unknown sitemap format at %s (root <%s>). Content snippet: %s", url, doc.root, snippet)
		return NodeResult(url, NodeOutcome.UNRECOGNIZED), []
