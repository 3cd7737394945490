# SitemapCSV — Configuration via Pydantic BaseSettings
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
	"""Application settings with sane defaults.

	Environment variables are prefixed with SITEMAPCSV_. CLI flags can override.
	"""

	model_config = SettingsConfigDict(env_prefix="SITEMAPCSV_", env_file=".env", extra="ignore")

	user_agent: str = Field(default="SitemapCSV/0.1 (+https://example.com)")
	min_delay: float = Field(default=0.0)
	timeout: float = Field(default=20.0)
	retries: int = Field(default=3)
	backoff: float = Field(default=0.5)
	output_file: str = Field(default="sitemap_urls.csv")
	log_level: str = Field(default="INFO")
	log_dir: str = Field(default="logs")
