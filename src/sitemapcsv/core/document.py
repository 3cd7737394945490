# SitemapCSV — Sitemap document parsing and shape classification
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

"""Turn sitemap XML into a nested field structure and classify it.

The field structure mirrors what generic XML-to-dict converters produce: a tag
seen once maps to a single value, a tag seen several times maps to a list.
Classification happens once, here, so the traversal engine only ever sees
a :class:`ParsedDocument` tagged as index, url set or unrecognized.
"""

import enum
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, List


INDEX_ROOT = "sitemapindex"
INDEX_ENTRY = "sitemap"
URLSET_ROOT = "urlset"
URLSET_ENTRY = "url"
LOCATION = "loc"


class DocumentParseError(Exception):
	"""Document text could not be read as XML."""

	def __init__(self, message: str) -> None:
		super().__init__(message)
		self.message = message


class DocumentKind(str, enum.Enum):
	INDEX = "index"
	URLSET = "urlset"
	UNRECOGNIZED = "unrecognized"


@dataclass
class ParsedDocument:
	kind: DocumentKind
	locations: List[str] = field(default_factory=list)
	root: str = ""
	# True when the root is a known sitemap root that carries no entries
	empty: bool = False

	@property
	def is_index(self) -> bool:
		return self.kind is DocumentKind.INDEX

	@property
	def is_urlset(self) -> bool:
		return self.kind is DocumentKind.URLSET


def local_name(tag: str) -> str:
	"""Strip an ElementTree ``{namespace}`` prefix from a tag."""
	return tag.rsplit("}", 1)[-1]


def as_list(value: Any) -> List[Any]:
	"""Normalize a one-or-many field to a list."""
	if value is None:
		return []
	if isinstance(value, list):
		return value
	return [value]


def xml_to_fields(element: ET.Element) -> Any:
	"""Convert an element's content into nested dicts, lists and strings.

	Leaf elements become their stripped text. Attributes are ignored; the
	sitemap protocol keeps everything useful in child elements.
	"""
	children = list(element)
	if not children:
		return (element.text or "").strip()
	fields: Dict[str, Any] = {}
	for child in children:
		if not isinstance(child.tag, str):
			# comments and processing instructions
			continue
		name = local_name(child.tag)
		value = xml_to_fields(child)
		if name in fields:
			existing = fields[name]
			if isinstance(existing, list):
				existing.append(value)
			else:
				fields[name] = [existing, value]
		else:
			fields[name] = value
	return fields


def entry_locations(entries: Any) -> List[str]:
	"""Collect non-blank ``loc`` values in document order, skipping entries without one."""
	locations: List[str] = []
	for entry in as_list(entries):
		if not isinstance(entry, dict):
			continue
		for loc in as_list(entry.get(LOCATION)):
			if isinstance(loc, str) and loc:
				locations.append(loc)
				break
	return locations


def classify(fields: Dict[str, Any]) -> ParsedDocument:
	"""Decide the document shape from a ``{root_name: content}`` mapping."""
	for root_name, entry_name, kind in (
		(INDEX_ROOT, INDEX_ENTRY, DocumentKind.INDEX),
		(URLSET_ROOT, URLSET_ENTRY, DocumentKind.URLSET),
	):
		if root_name not in fields:
			continue
		body = fields[root_name]
		entries = body.get(entry_name) if isinstance(body, dict) else None
		if not as_list(entries):
			return ParsedDocument(DocumentKind.UNRECOGNIZED, root=root_name, empty=True)
		return ParsedDocument(kind, entry_locations(entries), root=root_name)
	root = next(iter(fields), "")
	return ParsedDocument(DocumentKind.UNRECOGNIZED, root=root)


def parse_document(text: str) -> ParsedDocument:
	try:
		root = ET.fromstring(text.lstrip("\ufeff \t\r\n"))
	except ET.ParseError as e:
		raise DocumentParseError(f"invalid XML: {e}") from e
	return classify({local_name(root.tag): xml_to_fields(root)})
