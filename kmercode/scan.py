"""Slide a k-mer window along a sequence and produce the code of every window.

Two backends:
  - Python (iter_kmer_codes): a generator that re-encodes each window from
    the previous one in O(1) with the forward slide rule
        code = ((code & low_mask) << 2) | bits(new_base)
    It can skip over non-nucleotide bytes (skip_illegal=True), restarting the
    window after them.
  - numpy (kmer_codes): builds the codes of all windows at once as a uint64
    array, k shift-and-or passes over the whole sequence.  It rejects any
    non-nucleotide byte.

Both give exactly kmercode.kmer.encode(seq[i:i+k]) for window i.
"""

import sys

import numpy as np

from .batch import bases_to_bits, canonical_array, decode_array
from .encoding import BASE2BIT, ILLEGAL
from .errors import IllegalBaseError, KmerError
from .kmer import _as_bytes, _check_k, must_canonical, must_decode

_TWO = np.uint64(2)


# ---------------------------------------------------------------------------
# Python backend (incremental)
# ---------------------------------------------------------------------------

def iter_kmer_codes(seq, k, canonical=False, skip_illegal=False):
    """Iterate over (position, code) for every k-mer window of seq.

    Args:
        seq:          DNA sequence (bytes or str).
        k:            Window size, 1..32.
        canonical:    Yield canonical codes instead of forward-strand codes.
        skip_illegal: Skip every window that overlaps a non-nucleotide byte
                      instead of raising.

    Raises:
        KOverflowError: k is outside 1..32.
        IllegalBaseError: seq contains a non-nucleotide byte and
            skip_illegal is False.  k and non-ASCII text are rejected at
            call time; bad bytes only once iteration reaches them.
    """
    _check_k(k)
    return _iter_kmer_codes(_as_bytes(seq), k, canonical, skip_illegal)


def _iter_kmer_codes(seq, k, canonical, skip_illegal):
    low_mask = (1 << ((k - 1) << 1)) - 1

    code = 0
    run = 0  # consecutive legal bases ending at i
    for i, b in enumerate(seq):
        v = BASE2BIT[b]
        if v == ILLEGAL:
            if not skip_illegal:
                raise IllegalBaseError(b, i)
            code = 0
            run = 0
            continue
        code = ((code & low_mask) << 2) | v
        run += 1
        if run >= k:
            yield i - k + 1, must_canonical(code, k) if canonical else code


# ---------------------------------------------------------------------------
# numpy backend (vectorised)
# ---------------------------------------------------------------------------

def kmer_codes(seq, k, canonical=False):
    """Codes of all k-mer windows of seq as a uint64 array.

    The array has len(seq) - k + 1 entries (none if seq is shorter than k);
    entry i is the code of seq[i:i+k].

    Raises:
        KOverflowError: k is outside 1..32.
        IllegalBaseError: seq contains a non-nucleotide byte.
    """
    _check_k(k)
    bits = bases_to_bits(seq)
    bad = np.flatnonzero(bits == ILLEGAL)
    if len(bad):
        i = int(bad[0])
        raise IllegalBaseError(seq[i], i)

    n = len(bits) - k + 1
    if n <= 0:
        return np.zeros(0, dtype=np.uint64)

    bits = bits.astype(np.uint64)
    codes = np.zeros(n, dtype=np.uint64)
    for j in range(k):
        codes = (codes << _TWO) | bits[j:j + n]
    if canonical:
        codes = canonical_array(codes, k)
    return codes


# ---------------------------------------------------------------------------
# CLI: kmercode scan
# ---------------------------------------------------------------------------

def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(
        prog="kmercode scan",
        description=(
            "Print the code of every k-mer window of a sequence.\n\n"
            "Output: one line per window, POSITION<TAB>CODE<TAB>KMER\n"
            "(0-based position; KMER is the decoded, possibly canonical, k-mer)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("sequence", help="DNA sequence (IUPAC, any case)")
    parser.add_argument("-k", type=int, required=True,
                        help="k-mer size, 1-32")
    parser.add_argument("--canonical", action="store_true",
                        help="Report canonical k-mers")
    parser.add_argument("--skip-illegal", action="store_true",
                        help="Skip windows containing non-nucleotide bytes "
                             "instead of failing (python backend only)")
    parser.add_argument("--backend", choices=("python", "numpy"),
                        default="python",
                        help="Window encoder to use (default: python)")
    args = parser.parse_args(argv)

    backend = args.backend
    if backend == "numpy" and args.skip_illegal:
        print("  WARN: --skip-illegal is not supported by the numpy backend "
              "— falling back to the python backend", file=sys.stderr)
        backend = "python"

    try:
        if backend == "numpy":
            codes = kmer_codes(args.sequence, args.k, canonical=args.canonical)
            for pos, (code, kmer) in enumerate(
                    zip(codes.tolist(), decode_array(codes, args.k))):
                print(f"{pos}\t{code}\t{kmer.decode('ascii')}")
        else:
            for pos, code in iter_kmer_codes(args.sequence, args.k,
                                             canonical=args.canonical,
                                             skip_illegal=args.skip_illegal):
                kmer = must_decode(code, args.k).decode('ascii')
                print(f"{pos}\t{code}\t{kmer}")
    except KmerError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
