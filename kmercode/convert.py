"""Convert single k-mers to and from codes on the command line.

Subcommands:
  encode SEQ        print the code of SEQ
  decode CODE K     print the k-mer of CODE
  revcomp SEQ       print the reverse complement k-mer and its code
  canonical SEQ     print the canonical k-mer and its code
  bits SEQ          print the packed 2-bit layout, e.g. ACGT -> 00011011
"""

import sys

from .errors import KmerError
from .kmer import decode
from .kmer_code import KmerCode


def _print_kmer(kcode):
    print(f"{kcode}\t{kcode.code}")


def run(args):
    if args.command == "encode":
        print(KmerCode.from_kmer(args.sequence).code)
    elif args.command == "decode":
        print(decode(args.code, args.k).decode('ascii'))
    elif args.command == "revcomp":
        _print_kmer(KmerCode.from_kmer(args.sequence).revcomp())
    elif args.command == "canonical":
        _print_kmer(KmerCode.from_kmer(args.sequence).canonical())
    elif args.command == "bits":
        print(KmerCode.from_kmer(args.sequence).bits_string())


def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(
        prog="kmercode",
        description="Encode, decode and transform k-mers (k <= 32) as 64-bit codes.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
            ("encode", "Print the code of a k-mer"),
            ("revcomp", "Print the reverse complement k-mer and its code"),
            ("canonical", "Print the canonical k-mer and its code"),
            ("bits", "Print the 2-bit layout of a k-mer")):
        p = sub.add_parser(name, help=help_text, description=help_text)
        p.add_argument("sequence", help="k-mer, 1-32 IUPAC bases")

    p_decode = sub.add_parser("decode", help="Print the k-mer of a code",
                              description="Decode a code back to its k-mer.")
    p_decode.add_argument("code", type=int, help="k-mer code")
    p_decode.add_argument("k", type=int, help="k-mer size, 1-32")

    args = parser.parse_args(argv)
    try:
        run(args)
    except KmerError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
