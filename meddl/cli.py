#!/usr/bin/env python3
"""
Meddl CLI
=========
Command-line interface for the Meddlfraengisch translator.

Usage:
    meddl translate "Hallo Leute!"
    echo "Das ist nicht gut." | meddl translate --seed 3
    meddl rules --rules my_rules.yaml
"""

import argparse
import json
import logging
import sys

from meddl import __version__
from meddl.entropy import TrueRandom
from meddl.rules import list_rule_tables, load_rule_table
from meddl.translator import Translator

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def result(self, text: str):
        """Command results are printed even in quiet mode."""
        print(text)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def table(self, headers: list, rows: list, col_widths: list = None):
        """Print a formatted table."""
        if self.quiet:
            return

        if not col_widths:
            col_widths = [max(len(str(h)), max((len(str(r[i])) for r in rows), default=0)) + 2
                          for i, h in enumerate(headers)]

        header_line = ''.join(str(h).ljust(w) for h, w in zip(headers, col_widths))
        print(header_line)
        print('-' * len(header_line))

        for row in rows:
            print(''.join(str(c).ljust(w) for c, w in zip(row, col_widths)))


def setup_logging(verbose: bool = False):
    # CLI owns logging configuration; library modules only use getLogger().
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def build_translator(args) -> Translator:
    """Translator configured from command-line options."""
    table = load_rule_table(args.rules)
    rng = TrueRandom(seed=args.seed) if args.seed is not None else None
    probability = 0.0 if args.no_interlude else args.interlude_probability
    return Translator(table=table, rng=rng, interlude_probability=probability)


# =============================================================================
# Commands
# =============================================================================

def cmd_translate(args, out: Output):
    """Translate TEXT, or every line of stdin when no TEXT is given."""
    translator = build_translator(args)

    if args.text:
        out.result(translator.translate(" ".join(args.text)))
        return 0

    for line in sys.stdin:
        out.result(translator.translate(line.rstrip("\r\n")))
    return 0


def cmd_rules(args, out: Output):
    """Validate a rule table and show what it contains."""
    if args.list:
        for name in list_rule_tables():
            out.result(name)
        return 0

    table = load_rule_table(args.rules)
    summary = table.summary()

    if args.json:
        out.result(json.dumps(summary, indent=2, ensure_ascii=False))
        return 0

    out.print(f"\nRule table: {summary.pop('name')}\n")
    out.table(['Section', 'Entries'], [[k, v] for k, v in summary.items()])
    out.print()
    out.result("OK: rule table is valid")
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='meddl',
        description='Meddl - German to Meddlfraengisch translator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s translate "Hallo Leute, das ist nicht gut!"
  %(prog)s translate --seed 7 --no-interlude "Ich habe einen Computer."
  echo "Was machen wir jetzt?" | %(prog)s translate
  %(prog)s rules
  %(prog)s rules --rules my_rules.yaml --json
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- translate ---
    p = subparsers.add_parser('translate', aliases=['t'], help='Translate text')
    p.add_argument('text', nargs='*', help='Text to translate (default: read lines from stdin)')
    p.add_argument('--rules', '-r', help='Rule table file (default: packaged table)')
    p.add_argument('--seed', '-s', type=int, help='Seed for reproducible output')
    p.add_argument('--interlude-probability', type=float,
                   help='Chance per word of the interlude (default: from app.yaml)')
    p.add_argument('--no-interlude', action='store_true', help='Never append the interlude')

    # --- rules ---
    p = subparsers.add_parser('rules', help='Validate and summarize a rule table')
    p.add_argument('--rules', '-r', help='Rule table file (default: packaged table)')
    p.add_argument('--list', '-l', action='store_true', help='List packaged rule tables')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    cmd_map = {'t': 'translate'}
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'translate': cmd_translate,
        'rules': cmd_rules,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
