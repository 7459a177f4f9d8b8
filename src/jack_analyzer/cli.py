"""Command line entry points.

Usage:
    jack-analyze Main.jack     # writes Main.xml (parse tree)
    jack-tokenize Main.jack    # writes MainT.xml (flat token list)
"""

import argparse
import logging
import sys
from pathlib import Path

from .emitter import to_xml, tokens_to_xml
from .errors import JackError
from .parser import parse
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".jack"


def tree_output_path(source: Path) -> Path:
    return source.with_suffix(".xml")


def token_output_path(source: Path) -> Path:
    return source.with_name(f"{source.stem}T.xml")


def _build_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument("source", type=Path, help=f"Jack source file ({SOURCE_SUFFIX})")
    return parser


def _check_source(source: Path) -> bool:
    if source.suffix != SOURCE_SUFFIX or not source.is_file():
        print(f"Error: input file must be an existing {SOURCE_SUFFIX} file: {source}")
        return False
    return True


def _run(argv, prog: str, description: str, render, output_path) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    args = _build_parser(prog, description).parse_args(argv)

    source: Path = args.source
    if not _check_source(source):
        return 1

    # Render fully before touching the output file so failures leave nothing behind
    try:
        document = render(source.read_text(encoding="utf-8"))
    except (JackError, UnicodeDecodeError, OSError) as e:
        logger.debug("analysis of %s failed", source, exc_info=True)
        print(f"Error: {source}: {e}")
        return 1

    out = output_path(source)
    out.write_text(document, encoding="utf-8")
    print(f"Wrote {out}")
    return 0


def analyze_main(argv: list[str] | None = None) -> int:
    return _run(
        argv,
        "jack-analyze",
        "Parse a .jack file and write its parse tree as XML",
        lambda text: to_xml(parse(text)),
        tree_output_path,
    )


def tokenize_main(argv: list[str] | None = None) -> int:
    return _run(
        argv,
        "jack-tokenize",
        "Tokenize a .jack file and write the token list as XML",
        lambda text: tokens_to_xml(tokenize(text)),
        token_output_path,
    )


def main():
    sys.exit(analyze_main())


if __name__ == "__main__":
    main()
