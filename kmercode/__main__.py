"""kmercode CLI entry point.

Usage:
    kmercode <command> [<args>]
    python -m kmercode <command> [<args>]
"""

import difflib
import sys

CONVERT_COMMANDS = ["encode", "decode", "revcomp", "canonical", "bits"]
COMMANDS = CONVERT_COMMANDS + ["scan"]

USAGE = """\
usage: kmercode <command> [<args>]

kmercode — 2-bit packed 64-bit codes for k-mers (k <= 32).

Single k-mers:
  encode SEQ             Print the code of a k-mer
  decode CODE K          Print the k-mer of a code
  revcomp SEQ            Print the reverse complement k-mer and its code
  canonical SEQ          Print the canonical k-mer and its code
  bits SEQ               Print the 2-bit layout of a k-mer

Sequences:
  scan SEQ -k K          Print the code of every k-mer window

Use 'kmercode <command> -h' for help on a specific command.
"""


def _suggest(word, candidates, n=1, cutoff=0.6):
    """Return close matches for typo suggestions."""
    return difflib.get_close_matches(word, candidates, n=n, cutoff=cutoff)


def main(argv=None):
    args = argv if argv is not None else sys.argv[1:]

    if not args or args[0] in ("-h", "--help"):
        print(USAGE)
        sys.exit(0)

    cmd, rest = args[0], args[1:]

    if cmd in CONVERT_COMMANDS:
        from .convert import main as run
        run([cmd] + rest)

    elif cmd == "scan":
        from .scan import main as run
        run(rest)

    else:
        msg = f"Unknown command: {cmd}"
        hint = _suggest(cmd, COMMANDS)
        if hint:
            msg += f"\n\nDid you mean: kmercode {hint[0]}?"
        print(msg)
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()
