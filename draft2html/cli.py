"""
draft2html - Draft.js content to HTML converter

Converts Draft.js raw content JSON (or Markdown, through marko) into an HTML fragment.
"""

import argparse
import json
import logging
import os
import sys

from . import __version__
from .config import ConversionConfig, DEFAULT_CONFIG
from .DraftToHtml import DraftToHtml
from .exceptions import Draft2HtmlError
from .frontmatter_parser import convert_metadata_to_config, parse_markdown_with_frontmatter
from .marko_adapter import MarkoToContentState
from .raw_parser import load_raw, to_raw

MARKDOWN_EXTS = ['.md', '.markdown']
JSON_EXTS = ['.json']


def load_style_map(path):
    """Read a style-map JSON file (``{"inlineStyles": {...}, ...}``) into a config."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            options = json.load(f)
    except (OSError, ValueError) as e:
        raise Draft2HtmlError(f"Cannot read style map {path}: {e}") from e
    return ConversionConfig.from_dict(options)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="draft2html",
        description="Convert Draft.js raw content (or Markdown) to HTML.",
        epilog="Examples:\n"
               "  draft2html content.json -o content.html\n"
               "  draft2html content.json --style-map styles.json -o content.html\n"
               "  draft2html notes.md -o notes.json",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("input_file", help="Input file (.json raw content, .md, .markdown)")
    parser.add_argument("-o", "--output", required=True,
                        help="Output file (.html, .htm, or .json to dump the raw content)")
    parser.add_argument("-s", "--style-map", required=False, default=None,
                        help="JSON file with inlineStyles/defaultBlockTag/blockTags options")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages to stderr")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)
    input_file = args.input_file

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_ext = os.path.splitext(input_file)[1].lower()
    if input_ext not in MARKDOWN_EXTS + JSON_EXTS:
        print(f"Error: Unsupported input format: {input_ext}", file=sys.stderr)
        print("Supported formats: .json, .md, .markdown", file=sys.stderr)
        return 1

    if not os.path.exists(input_file):
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        return 1

    output_ext = os.path.splitext(args.output)[1].lower()

    try:
        config = load_style_map(args.style_map) if args.style_map else DEFAULT_CONFIG

        if input_ext in MARKDOWN_EXTS:
            metadata, md_content = parse_markdown_with_frontmatter(input_file)
            # Command line style map first, front matter on top of it
            config = convert_metadata_to_config(metadata, base=config)
            adapter = MarkoToContentState(input_dir=os.path.dirname(os.path.abspath(input_file)))
            content_state = adapter.parse(md_content)
        else:
            content_state = load_raw(input_file)

        if output_ext in [".htm", ".html"]:
            DraftToHtml.convert_to_html(input_file, args.output, content_state=content_state, config=config)
            print(f"Successfully converted to {args.output}")

        elif output_ext == ".json":
            # Debug: output the parsed content state
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(to_raw(content_state), f, indent=2, ensure_ascii=False)
            print(f"Successfully wrote raw content to {args.output}")

        else:
            print(f"Error: Unsupported output format: {output_ext}", file=sys.stderr)
            print("Supported formats: .html, .htm, .json", file=sys.stderr)
            return 1

    except Draft2HtmlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
