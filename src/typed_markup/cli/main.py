"""Main CLI entry point for the typed-markup command-line tool.

Generates sitemaps and RSS feeds from plain-text or JSON descriptions:

    typed-markup sitemap urls.txt -o sitemap.xml
    typed-markup feed feed.json --indent 2
"""

import argparse
import json
import sys
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from typed_markup.api import MarkupRenderer
from typed_markup.shared import (
    ConfigValidationError,
    Indentation,
    MarkupConfig,
    configure_logging,
    get_logger,
)
from typed_markup.tree import Document, MarkupError, Node, group, text
from typed_markup.vocabulary import rss, sitemap

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class InputError(ValueError):
    """Raised when an input file cannot be turned into a document."""


@dataclass
class CLIConfig:
    """Configuration management for CLI operations."""

    markup_config: MarkupConfig = field(default_factory=MarkupConfig)
    time_zone: Optional[str] = None
    verbose: bool = False
    quiet: bool = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file holds a ``MarkupConfig`` dictionary, optionally under a
        ``"markup"`` key next to a ``"time_zone"`` key.

        Raises:
            ConfigValidationError: the file is missing or invalid
        """
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigValidationError(f"Cannot read config file {config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config file {config_path} must hold an object")

        time_zone = data.pop("time_zone", None)
        markup_data = data.pop("markup", data)
        return cls(markup_config=MarkupConfig.from_dict(markup_data), time_zone=time_zone)

    @property
    def effective_time_zone(self) -> str:
        return self.time_zone or self.markup_config.dates.default_time_zone


def _parse_date(value: Any, field_name: str) -> datetime:
    if not isinstance(value, str):
        raise InputError(f"{field_name} must be an ISO 8601 string")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise InputError(f"{field_name}: {e}") from e


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in {path}: {e}") from e


def build_sitemap(path: Path, time_zone: str) -> Document[Any]:
    """Build a sitemap from a URL-per-line text file or a JSON list."""
    if path.suffix.lower() == ".json":
        entries = _load_json(path)
        if not isinstance(entries, list):
            raise InputError("Sitemap JSON must be a list of entries")
    else:
        lines = path.read_text(encoding="utf-8").splitlines()
        entries = [
            line.strip()
            for line in lines
            if line.strip() and not line.lstrip().startswith("#")
        ]

    urls = []
    for index, entry in enumerate(entries):
        if isinstance(entry, str):
            entry = {"loc": entry}
        if not isinstance(entry, dict) or "loc" not in entry:
            raise InputError(f"Sitemap entry {index} needs a 'loc'")

        nodes: List[Node[Any]] = [sitemap.loc(entry["loc"])]
        if "lastmod" in entry:
            moment = _parse_date(entry["lastmod"], f"entry {index} lastmod")
            nodes.append(sitemap.lastmod(moment, time_zone))
        if "changefreq" in entry:
            nodes.append(sitemap.changefreq(entry["changefreq"]))
        if "priority" in entry:
            nodes.append(sitemap.priority(entry["priority"]))
        urls.append(sitemap.url(*nodes))

    return sitemap.sitemap(*urls)


def _feed_item(data: Dict[str, Any], index: int, time_zone: str) -> Node[Any]:
    if not isinstance(data, dict):
        raise InputError(f"Feed item {index} must be an object")

    nodes: List[Node[Any]] = []
    if "title" in data:
        nodes.append(rss.title(data["title"]))
    if "link" in data:
        nodes.append(rss.link(data["link"]))
    if "guid" in data:
        nodes.append(
            rss.guid(
                text(data["guid"]),
                rss.is_perma_link(bool(data.get("guid_is_perma_link", True))),
            )
        )
    if "description" in data:
        nodes.append(rss.description(data["description"]))
    if "pub_date" in data:
        moment = _parse_date(data["pub_date"], f"item {index} pub_date")
        nodes.append(rss.pub_date(moment, time_zone))
    if "content" in data:
        nodes.append(rss.content(data["content"]))
    return rss.item(*nodes)


def build_feed(path: Path, time_zone: str) -> Document[Any]:
    """Build an RSS feed from a JSON channel description."""
    data = _load_json(path)
    if not isinstance(data, dict):
        raise InputError("Feed JSON must be an object describing the channel")
    if "title" not in data:
        raise InputError("Feed JSON needs a 'title'")

    nodes: List[Node[Any]] = [rss.title(data["title"])]
    if "description" in data:
        nodes.append(rss.description(data["description"]))
    if "link" in data:
        nodes.append(rss.link(data["link"]))
    if "language" in data:
        nodes.append(rss.language(data["language"]))
    if "feed_url" in data:
        nodes.append(rss.atom_link(data["feed_url"]))
    if "ttl" in data:
        nodes.append(rss.ttl(data["ttl"]))
    if "last_build_date" in data:
        moment = _parse_date(data["last_build_date"], "last_build_date")
        nodes.append(rss.last_build_date(moment, time_zone))

    items = data.get("items", [])
    if not isinstance(items, list):
        raise InputError("'items' must be a list")
    nodes.append(group(_feed_item(item, index, time_zone) for index, item in enumerate(items)))
    return rss.feed(*nodes)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="typed-markup",
        description="Generate sitemaps and RSS feeds as well-formed XML",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sitemap_parser = subparsers.add_parser(
        "sitemap", help="Build a sitemap from a URL list or JSON entries"
    )
    sitemap_parser.add_argument(
        "input", type=Path, help="Text file (one URL per line) or JSON list"
    )

    feed_parser = subparsers.add_parser(
        "feed", help="Build an RSS feed from a JSON channel description"
    )
    feed_parser.add_argument("input", type=Path, help="JSON channel description")

    for sub in (sitemap_parser, feed_parser):
        sub.add_argument("--output", "-o", type=Path, help="Write to file instead of stdout")
        sub.add_argument(
            "--indent", type=int, metavar="N", help="Pretty-print with N spaces (or tabs)"
        )
        sub.add_argument("--tabs", action="store_true", help="Indent with tabs")
        sub.add_argument("--time-zone", help="Time zone for dates, e.g. Europe/Paris")
        sub.add_argument("--config", type=Path, help="JSON configuration file")

    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only report errors")

    return parser


def _resolve_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig.from_file(args.config) if args.config else CLIConfig()

    if args.indent is not None or args.tabs:
        count = args.indent if args.indent is not None else 1
        indentation = Indentation.tabs(count) if args.tabs else Indentation.spaces(count)
        config.markup_config = config.markup_config.override(
            render__indentation=indentation
        )
    if args.time_zone:
        config.time_zone = args.time_zone

    # Verbosity flags win over the logging level of the configuration file.
    if args.verbose or args.quiet:
        level = "DEBUG" if args.verbose else "ERROR"
        markup_config = config.markup_config
        config.markup_config = markup_config.override(
            global_=replace(markup_config.global_, logging_level=level)
        )
    config.verbose = args.verbose
    config.quiet = args.quiet
    return config


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle the sitemap and feed commands."""
    logger = get_logger(__name__, None, "cli")
    config = _resolve_config(args)
    configure_logging(config.markup_config.global_.logging_level)

    if not args.input.exists():
        print(f"File not found: {args.input}", file=sys.stderr)
        return EXIT_FAILURE

    builder = build_sitemap if args.command == "sitemap" else build_feed
    document = builder(args.input, config.effective_time_zone)
    renderer = MarkupRenderer(config.markup_config)

    if args.output:
        result = renderer.render_to_file(document, args.output)
        if not config.quiet:
            print(
                f"Wrote {result.metrics.elements_rendered} elements to {args.output}",
                file=sys.stderr,
            )
    else:
        print(renderer.render_document(document))

    logger.info("Command completed", extra={"command": args.command})
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    try:
        return cmd_generate(args)
    except (ConfigValidationError, MarkupError, ValueError, TypeError, OSError) as e:
        # InputError is a ValueError; MarkupError subclasses are reported the same way.
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
