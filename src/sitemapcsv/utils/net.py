# SitemapCSV — Networking utilities (requests session with retries)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


RETRY_STATUSES = (429, 500, 502, 503, 504)


def build_session(user_agent: str, retries: int = 3, backoff: float = 0.5) -> requests.Session:
	"""Build a requests Session that asks for XML and retries transient failures.

	Retries exhausted on a retryable status still return the last response,
	so the caller sees the real status code instead of a RetryError.
	"""
	s = requests.Session()
	s.headers.update(
		{
			"User-Agent": user_agent,
			"Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
			"Accept-Encoding": "gzip, deflate",
		}
	)
	retry = Retry(
		total=retries,
		backoff_factor=backoff,
		status_forcelist=RETRY_STATUSES,
		allowed_methods=frozenset({"GET", "HEAD"}),
		raise_on_status=False,
	)
	adapter = HTTPAdapter(max_retries=retry)
	s.mount("http://", adapter)
	s.mount("https://", adapter)
	return s
