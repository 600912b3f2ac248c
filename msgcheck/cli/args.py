"""CLI Argument Parsing"""

import argparse
import argcomplete

from msgcheck import __version__
from msgcheck.core.patterns import CATEGORIES, SEVERITIES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cmc',
        description='Check a git commit message for structure, style and problem patterns',
        epilog='Example: cmc .git/COMMIT_EDITMSG (or as a commit-msg hook: cmc "$1")'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Message source
    parser.add_argument('file', nargs='?', metavar='FILE', help='Commit message file (default: stdin)')
    parser.add_argument('-m', '--message', type=str, metavar='TEXT', help='Check TEXT instead of reading a file')

    # Validation options
    parser.add_argument('-c', '--conventional', action='store_true', help='Require conventional commit format')
    parser.add_argument('-l', '--limit', type=int, metavar='N', help='Subject length limit (default: 50)')
    parser.add_argument('-s', '--suggest', action='store_true', help='Show improvement suggestions')
    parser.add_argument('--no-patterns', action='store_true', help='Skip problem pattern detection')
    parser.add_argument('--min-severity', type=str, choices=SEVERITIES, help='Only report patterns at or above this severity')

    # Review options
    parser.add_argument('-i', '--interactive', action='store_true', help='Review and dismiss warnings one by one')
    parser.add_argument('--strict', action='store_true', help='Fail on warnings, not just errors')

    # Setup/config
    parser.add_argument('--list-patterns', nargs='?', const='all', choices=('all',) + CATEGORIES,
                        metavar='CATEGORY', help='List detection patterns (optionally one category)')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv=None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
