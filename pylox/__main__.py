import argparse
import sys

from .lox import Lox

# See sysexits(3).
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pylox", usage="%(prog)s [script]", description="Run Lox scripts")
    parser.add_argument("script", nargs="*", help=argparse.SUPPRESS)
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print(f"Usage: {parser.prog} [script]")
        sys.exit(EX_USAGE)

    lox = Lox()
    if not args.script:
        lox.run_prompt()
        return

    try:
        lox.run_file(args.script[0])
    except OSError as error:
        print(f"pylox: {error}", file=sys.stderr)
        sys.exit(EX_NOINPUT)

    if lox.session.had_error:
        sys.exit(EX_DATAERR)
    if lox.session.had_runtime_error:
        sys.exit(EX_SOFTWARE)


if __name__ == "__main__":
    main()
