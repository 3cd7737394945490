from typer.testing import CliRunner
from sitemapcsv import cli


runner = CliRunner()


class MockSession:
	def __init__(self, mapping):
		self.mapping = mapping

	def get(self, url, timeout=20):
		class R:
			def __init__(self, text, status_code=200):
				self.text = text
				self.content = text.encode("utf-8")
				self.status_code = status_code
				self.reason = ""
				self.headers = {"Content-Type": "application/xml"}

		if url not in self.mapping:
			return R("", 404)
		return R(self.mapping[url])


SITES = {
	"https://example.com/sitemap.xml": """
		<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
			<sitemap><loc>https://example.com/pages.xml</loc></sitemap>
			<sitemap><loc>https://example.com/missing.xml</loc></sitemap>
		</sitemapindex>
	""",
	"https://example.com/pages.xml": """
		<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
			<url><loc>https://example.com/a</loc></url>
			<url><loc>https://example.com/b</loc></url>
			<url><loc>https://example.com/a</loc></url>
		</urlset>
	""",
	"https://example.com/empty.xml": "<urlset></urlset>",
}


def _setup(monkeypatch, tmp_path):
	monkeypatch.chdir(tmp_path)
	monkeypatch.setattr(cli, "configure_logging", lambda **kw: None)
	monkeypatch.setattr(cli, "make_session", lambda **kw: MockSession(SITES))


def test_crawl_writes_csv(monkeypatch, tmp_path):
	_setup(monkeypatch, tmp_path)
	result = runner.invoke(cli.app, ["crawl", "https://example.com/sitemap.xml", "-o", "out.csv"])
	assert result.exit_code == 0
	lines = (tmp_path / "out.csv").read_text(encoding="utf-8").splitlines()
	assert lines == ["URL", "https://example.com/a", "https://example.com/b"]


def test_strict_fails_when_a_sitemap_failed(monkeypatch, tmp_path):
	_setup(monkeypatch, tmp_path)
	result = runner.invoke(cli.app, ["crawl", "https://example.com/sitemap.xml", "-o", "out.csv", "--strict"])
	assert result.exit_code == 1
	assert (tmp_path / "out.csv").exists()


def test_no_urls_writes_nothing(monkeypatch, tmp_path):
	_setup(monkeypatch, tmp_path)
	result = runner.invoke(cli.app, ["crawl", "https://example.com/empty.xml", "-o", "out.csv"])
	assert result.exit_code == 0
	assert "No URLs found" in result.output
	assert not (tmp_path / "out.csv").exists()


def test_output_defaults_from_environment(monkeypatch, tmp_path):
	_setup(monkeypatch, tmp_path)
	monkeypatch.setenv("SITEMAPCSV_OUTPUT_FILE", "env.csv")
	result = runner.invoke(cli.app, ["crawl", "https://example.com/pages.xml"])
	assert result.exit_code == 0
	assert (tmp_path / "env.csv").exists()


def test_print_config(monkeypatch, tmp_path):
	monkeypatch.chdir(tmp_path)
	result = runner.invoke(cli.app, ["print-config"])
	assert result.exit_code == 0
	assert "sitemap_urls.csv" in result.output
