from sitemapcsv.storage.writers import write_urls_csv


def test_write_urls_csv_header_and_rows(tmp_path):
	path = tmp_path / "nested" / "urls.csv"
	n = write_urls_csv(str(path), ["https://example.com/a", "https://example.com/b?x=1,2"])
	assert n == 2
	lines = path.read_text(encoding="utf-8").splitlines()
	assert lines == ["URL", "https://example.com/a", '"https://example.com/b?x=1,2"']
