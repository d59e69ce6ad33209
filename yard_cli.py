"""Command line front-end: `yardcalc eval "3 + 4 * 2"`."""
import argparse
import logging
import sys

from yard_ast import unparse
from yard_config import load_settings
from yard_errors import YardError
from yard_lexer import tokenize
from yard_parser import evaluate_expression, to_ast

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="yardcalc", description="Evaluate arithmetic expressions."
    )
    parser.add_argument("--debug", action="store_true", help="Log parser steps.")
    parser.add_argument(
        "--lazy",
        action="store_true",
        help="Build the whole tree before evaluating instead of folding.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in [
        ("eval", "Print the value of EXPRESSION."),
        ("tokens", "Print the tokens of EXPRESSION, one per line."),
        ("ast", "Print EXPRESSION as parsed, with minimal parentheses."),
    ]:
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("expression", help='e.g. "max(1, 2) ^ pi"')
    return parser


def parse_args(argv):
    return _build_parser().parse_args(argv)


def cmd_eval(args, settings):
    print(evaluate_expression(args.expression, fold=settings.fold))


def cmd_tokens(args, settings):
    for tok in tokenize(args.expression):
        print(tok)


def cmd_ast(args, settings):
    print(unparse(to_ast(args.expression)))


COMMANDS = {"eval": cmd_eval, "tokens": cmd_tokens, "ast": cmd_ast}


def main(argv=None):
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse exits on --help and on usage errors.
        return e.code if isinstance(e.code, int) else EXIT_USAGE

    settings = load_settings()
    if args.debug:
        settings = settings._replace(debug=True)
    if args.lazy:
        settings = settings._replace(fold=False)
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    logger.debug("%s %r with %r", args.command, args.expression, settings)

    try:
        COMMANDS[args.command](args, settings)
    except YardError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
