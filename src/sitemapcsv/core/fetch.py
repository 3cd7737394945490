# SitemapCSV — Sitemap fetcher (requests, pacing, gzip, charset)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import codecs
import gzip
import logging
import re
import zlib
from typing import Optional
from urllib.parse import urlparse

import requests

from .session import HostPacer


logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
DEFAULT_ENCODING = "utf-8"
XML_DECLARED_ENCODING = re.compile(rb"""^\s*<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")


class FetchError(Exception):
	"""Transport failure or non-success response for a sitemap URL."""

	def __init__(self, url: str, message: str, status: Optional[int] = None) -> None:
		super().__init__(f"Failed to fetch sitemap from {url}: {message}")
		self.url = url
		self.status = status
		self.message = message


def header_charset(content_type: str) -> Optional[str]:
	"""Charset parameter of a Content-Type header, if the header carries one."""
	for param in content_type.split(";")[1:]:
		key, _, value = param.partition("=")
		if key.strip().lower() == "charset":
			return value.strip().strip("\"'") or None
	return None


def decode_document(content: bytes, content_type: str = "") -> str:
	"""Decode sitemap bytes: header charset, then the XML declaration, then UTF-8.

	requests falls back to ISO-8859-1 for text/* without a charset, which would
	mangle UTF-8 URLs, so the body is never decoded through Response.text.
	"""
	if content.startswith(codecs.BOM_UTF8):
		return content[len(codecs.BOM_UTF8):].decode("utf-8", errors="replace")
	candidates = [header_charset(content_type)]
	m = XML_DECLARED_ENCODING.match(content)
	if m:
		candidates.append(m.group(1).decode("ascii"))
	for encoding in candidates:
		if not encoding:
			continue
		try:
			return content.decode(encoding, errors="replace")
		except LookupError:
			logger.debug("Unknown charset %r, trying next", encoding)
	return content.decode(DEFAULT_ENCODING, errors="replace")


class SitemapFetcher:
	"""Fetch sitemap documents as fully materialized text."""

	def __init__(
		self,
		session: requests.Session,
		timeout: float = 20.0,
		min_delay: float = 0.0,
		pacer: Optional[HostPacer] = None,
	) -> None:
		self.session = session
		self.timeout = timeout
		self.min_delay = max(0.0, float(min_delay))
		self.pacer = pacer or HostPacer()

	def fetch(self, url: str) -> str:
		logger.info("Fetching sitemap: %s", url)
		self.pacer.wait(urlparse(url).netloc, self.min_delay)
		try:
			r = self.session.get(url, timeout=self.timeout)
		except requests.RequestException as e:
			raise FetchError(url, str(e)) from e
		if not 200 <= r.status_code < 300:
			raise FetchError(url, f"{r.status_code} {r.reason or ''}".strip(), status=r.status_code)
		content = r.content or b""
		# .xml.gz files arrive compressed even after requests handles Content-Encoding
		if content[:2] == GZIP_MAGIC:
			try:
				content = gzip.decompress(content)
			except (OSError, EOFError, zlib.error) as e:
				raise FetchError(url, f"corrupt gzip payload: {e}", status=r.status_code) from e
			# the Content-Type describes the archive, not the XML inside it
			return decode_document(content)
		return decode_document(content, r.headers.get("Content-Type", ""))
