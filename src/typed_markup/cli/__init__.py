"""Command-line interface for generating sitemaps and RSS feeds.

Both commands read a plain description of the content (a URL list or a JSON
channel) and write the rendered XML to stdout or a file.
"""

from .main import main

__all__ = ["main"]
