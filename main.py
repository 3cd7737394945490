# SitemapCSV — entry point
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from sitemapcsv.cli import main


if __name__ == "__main__":
	main()
