# SitemapCSV — Output writers (CSV)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import csv
from typing import Iterable
from ..utils.io import ensure_parent_dir


CSV_HEADER = "URL"


def write_urls_csv(path: str, urls: Iterable[str]) -> int:
	"""Write one URL per row under a single ``URL`` header. Returns rows written."""
	ensure_parent_dir(path)
	count = 0
	with open(path, "w", encoding="utf-8", newline="") as f:
		writer = csv.writer(f, lineterminator="\n")
		writer.writerow([CSV_HEADER])
		for u in urls:
			writer.writerow([u])
			count += 1
	return count
