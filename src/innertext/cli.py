"""
CLI interface for innertext.

Pipe-friendly: reads HTML from a file or stdin and prints the text a browser
would render for one element of it.
"""

from __future__ import annotations

import argparse
import logging
import sys

from bs4 import FeatureNotFound

from .config import get_config
from .core import inner_text
from .soup import select_root
from .style import InlineStyleResolver

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    cfg = get_config()

    parser = argparse.ArgumentParser(
        prog="innertext",
        description="Extract the rendered text of an HTML element",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input HTML file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--selector",
        "-s",
        type=str,
        help="CSS selector of the element to extract (default: first element in the body)",
    )

    parser.add_argument(
        "--parser",
        "-p",
        type=str,
        default=cfg.parse.parser,
        help=f"BeautifulSoup tree builder (default: {cfg.parse.parser})",
    )

    parser.add_argument(
        "--inline-styles",
        "-i",
        action="store_true",
        default=cfg.style.inline_styles,
        help="Honour display and white-space declared in style attributes",
    )

    parser.add_argument(
        "--no-trailing-newline",
        "-n",
        action="store_false",
        dest="trailing_newline",
        default=cfg.output.trailing_newline,
        help="Do not terminate the output with a newline",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug information to stderr",
    )

    return parser.parse_args(args)


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging from config, DEBUG when verbose."""
    level = logging.DEBUG if verbose else getattr(logging, get_config().log.level, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def read_input(filepath: str | None) -> str:
    """Read markup from file or stdin."""
    if filepath:
        with open(filepath, encoding="utf-8", errors="replace") as f:
            return f.read()
    return sys.stdin.read()


def extract(
    markup: str,
    selector: str | None = None,
    parser: str = "html.parser",
    inline_styles: bool = False,
) -> str:
    """Parse markup and return the rendered text of the selected element."""
    root = select_root(markup, selector=selector, parser=parser)
    resolver = InlineStyleResolver() if inline_styles else None
    return inner_text(root, style_resolver=resolver)


def main(args: list[str] | None = None) -> int:
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    try:
        markup = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        text = extract(
            markup,
            selector=parsed.selector,
            parser=parsed.parser,
            inline_styles=parsed.inline_styles,
        )
    except FeatureNotFound:
        print(f"Error: Parser not available: {parsed.parser}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug("extracted %d characters", len(text))
    sys.stdout.write(text + "\n" if parsed.trailing_newline else text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
