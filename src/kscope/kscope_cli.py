"""
KSCOPE CLI Entrypoint.

This module provides the command-line interface for scanning and parsing KSCOPE
source code and rendering the resulting syntax tree.

Features:
    - Read source from a file or an inline string.
    - Lex and parse a whole program, a single statement, or a single expression.
    - Render the tree as Graphviz DOT or JSON, to the console or to a file.
    - Dump the token stream instead of parsing.

Example usage:
    kscope fib.ks
    kscope fib.ks -o fib.dot
    kscope -s "1 + 2 * f(x)" -m expression -f json
    kscope fib.ks --tokens

Functions:
    run_kscope(source: str, is_string: bool = False, fmt: str = "dot", out: str | None = None,
               mode: str = "program", tokens: bool = False, pretty: bool = False) -> None:
        Executes the full KSCOPE pipeline (lex → parse → render → output).

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, runs the pipeline and reports errors.
"""

import argparse
import logging
import sys

from kscope.kscope_ast import ASTNode
from kscope.kscope_lexer import tokenize
from kscope.kscope_parser import Parser
from kscope.kscope_render import Renderer

logger = logging.getLogger(__name__)

MODES = ("program", "statement", "expression")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kscope", description="Parse KSCOPE source and render its syntax tree."
    )
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=("dot", "json"),
        default="dot",
        help="Output format (default: dot)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-m",
        "--mode",
        choices=MODES,
        default="program",
        help="Grammar entry point (default: program)",
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream instead of parsing"
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def run_kscope(
    source: str,
    is_string: bool = False,
    fmt: str = "dot",
    out: str | None = None,
    mode: str = "program",
    tokens: bool = False,
    pretty: bool = False,
) -> None:
    """
    Run the KSCOPE toolchain: lex, parse, render, and print or write the result.

    Args:
        source (str): The KSCOPE source code or path to a source file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        fmt (str): Output format ('dot' or 'json'). Defaults to 'dot'.
        out (str | None): Optional path to write the rendered output. If None, prints to stdout.
        mode (str): Entry point: 'program', 'statement' or 'expression'. Defaults to 'program'.
        tokens (bool): If True, prints the tokens one per line and stops before parsing.
        pretty (bool): If True, prints formatted banners around the output. Defaults to False.

    Raises:
        ValueError: If `mode` is not one of the supported entry points.
        OSError: If the source file cannot be read or the output file cannot be written.
        UnicodeDecodeError: If the source file is not valid UTF-8.
        LexError: If the source contains an invalid token.
        UnexpectedTokenError: If the tokens do not form a valid construct.
        NestingTooDeepError: If the input nests deeper than the parser can follow.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown parse mode: {mode!r}")

    # 1. Read source
    if not is_string:
        logger.debug("Reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing
    token_list = tokenize(source)
    if tokens:
        for tok in token_list:
            print(repr(tok))
        return

    # 3. Parsing
    parser = Parser(token_list)
    roots: list[ASTNode]
    if mode == "statement":
        roots = [parser.parse_statement_entrypoint()]
    elif mode == "expression":
        roots = [parser.parse_expr_entrypoint()]
    else:
        roots = list(parser.parse())
    logger.debug("Parsed %d root node(s) in %s mode", len(roots), mode)

    # 4. Rendering
    text = Renderer(fmt).render(roots)

    # 5. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        banner = "=" * 20
        print(f"{banner}\nSyntax tree ({fmt})\n{banner}\n{text}\n{banner}")
    else:
        print(text)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the KSCOPE CLI.

    Prints the usage message and returns 1 when no arguments are given. Otherwise
    runs `run_kscope`; scan, parse, decoding and I/O errors are printed to stderr as
    `error: <message>` and return 1.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-f`, `--format`: Output format ('dot' or 'json'), default is 'dot'.
        - `-o`, `--out`: Write rendered output to a file.
        - `-m`, `--mode`: Grammar entry point ('program', 'statement', 'expression').
        - `--tokens`: Print the token stream instead of parsing.
        - `-p`, `--pretty`: Show banners around the output.
        - `--verbose`: Enable debug logging.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = build_arg_parser()
    if not argv:
        parser.print_usage()
        return 1

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        run_kscope(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            mode=args.mode,
            tokens=args.tokens,
            pretty=args.pretty,
        )
    except (SyntaxError, OSError, UnicodeDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
