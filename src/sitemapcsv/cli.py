# SitemapCSV — CLI (Typer)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import typer
from typing import List, Optional
from rich import print

from .config import Settings
from .core.fetch import SitemapFetcher
from .core.session import make_session
from .core.traverse import SitemapCrawler
from .logging_config import configure_logging
from .storage.writers import write_urls_csv

app = typer.Typer(add_completion=False, no_args_is_help=True)

logger = logging.getLogger(__name__)


@app.command()
def crawl(
	url: List[str] = typer.Argument(..., help="Sitemap URL(s) to start from"),
	output: Optional[str] = typer.Option(None, "--output", "-o", help="CSV file to write"),
	delay: Optional[float] = typer.Option(None, help="Minimum delay per host (seconds)"),
	timeout: Optional[float] = typer.Option(None, help="Request timeout (seconds)"),
	user_agent: Optional[str] = typer.Option(None, help="Override User-Agent"),
	retries: Optional[int] = typer.Option(None, help="HTTP retry attempts"),
	backoff: Optional[float] = typer.Option(None, help="Retry backoff factor"),
	log_level: Optional[str] = typer.Option(None, help="Log level"),
	strict: bool = typer.Option(False, "--strict", help="Exit non-zero if any sitemap failed or was empty"),
):
	"""Collect every page URL reachable from the given sitemaps into a CSV file."""
	cfg = Settings()
	configure_logging(level=log_level or cfg.log_level, log_dir=cfg.log_dir)
	session = make_session(
		user_agent=user_agent or cfg.user_agent,
		retries=retries if retries is not None else cfg.retries,
		backoff=backoff if backoff is not None else cfg.backoff,
	)
	fetcher = SitemapFetcher(
		session,
		timeout=timeout if timeout is not None else cfg.timeout,
		min_delay=delay if delay is not None else cfg.min_delay,
	)
	out_file = output or cfg.output_file

	print("[bold]Starting sitemap processing...[/bold]")
	result = SitemapCrawler(fetcher).crawl(url)
	pages = result.discovered
	print({
		"pages": len(pages),
		"sitemaps": len(result.visited),
		"failures": len(result.failures),
		"warnings": len(result.warnings),
	})

	if not pages:
		print("No URLs found in the provided sitemaps.")
	else:
		try:
			count = write_urls_csv(out_file, pages)
		except OSError as e:
			logger.error("Failed to write CSV file '%s': %s", out_file, e)
			raise typer.Exit(code=1)
		print(f"Successfully generated [bold]{out_file}[/bold] with {count} unique URLs.")

	if strict and (result.failures or result.warnings):
		raise typer.Exit(code=1)


@app.command("print-config")
def print_config():
	"""Print effective configuration from environment."""
	cfg = Settings()
	print(cfg.model_dump())


def main():
	app()


if __name__ == "__main__":
	main()
