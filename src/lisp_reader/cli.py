import sys
import logging
import argparse
from pathlib import Path
from typing import TextIO

from lisp_reader import StreamReader, InputSourceError, ReadSyntaxError, IncompleteDatum, read_all, print_datum


def repl(args: argparse.Namespace):
    """Read data interactively and print each one in canonical form."""

    def prompt():
        print(args.prompt, end='', flush=True)

    def report(error: ReadSyntaxError):
        print(f'error: {error}', flush=True)

    reader = StreamReader.from_file(sys.stdin, on_prompt=prompt, on_error=report)
    for datum in reader:
        print(print_datum(datum), flush=True)
    print()


def read(args: argparse.Namespace):
    """Print every datum found in the specified files."""
    errors = 0

    def dump(file: TextIO, name: str) -> int:
        def report(error: ReadSyntaxError):
            print(f'{name}: error: {error}', file=sys.stderr)

        reader = StreamReader.from_file(file, on_error=report)
        for datum in reader:
            print(print_datum(datum))
        if not reader.pending.strip():
            return reader.discarded
        # the end of a file ends its last atom too
        try:
            for datum in read_all(reader.pending):
                print(print_datum(datum))
        except IncompleteDatum:
            print(f'{name}: warning: unterminated datum at end of input', file=sys.stderr)
        except ReadSyntaxError as e:
            report(e)
            return reader.discarded + 1
        return reader.discarded

    for path in args.paths or ['-']:
        name = '<stdin>' if path == '-' else path
        try:
            if path == '-':
                errors += dump(sys.stdin, name)
                continue
            path = Path(path)
            if not path.is_file():
                print(f'Cannot read \'{path}\': No such file', file=sys.stderr)
                errors += 1
                continue
            with path.open(encoding='utf-8') as f:
                errors += dump(f, str(path))
        except InputSourceError as e:
            print(f'Cannot read \'{name}\': {e}', file=sys.stderr)
            errors += 1

    if args.strict and errors > 0:
        exit(1)


def main():
    """Entry point of CLI commands."""
    parser = argparse.ArgumentParser(prog='lisp-reader', description='read S-expression data incrementally')
    parser.add_argument('--log-level', default='WARNING', type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='log level of lisp_reader loggers (default: WARNING)')
    subparsers = parser.add_subparsers()

    # subcommand: repl
    parser_repl = subparsers.add_parser('repl', help='read data from stdin interactively')
    parser_repl.add_argument('--prompt', default='> ', type=str,
                             help='prompt shown when no datum is pending (default: "> ")')
    parser_repl.set_defaults(handler=repl)

    # subcommand: read
    parser_read = subparsers.add_parser('read', help='print every datum in files')
    parser_read.add_argument('paths', type=str, nargs='*',
                             help='paths to input files, "-" for stdin (default: stdin)')
    parser_read.add_argument('--strict', action='store_true', default=False,
                             help='exit with status 1 if any syntax error is found')
    parser_read.set_defaults(handler=read)

    args = parser.parse_args()
    logging.basicConfig(format='%(name)s: %(levelname)s: %(message)s')
    for name in ('lisp_reader.reader', 'lisp_reader.grammar'):
        logging.getLogger(name).setLevel(args.log_level)
    if not hasattr(args, 'handler'):
        args.prompt = '> '
        args.handler = repl
    args.handler(args)


if __name__ == '__main__':
    main()
