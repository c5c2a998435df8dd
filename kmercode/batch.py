"""Vectorised k-mer code operations over numpy uint64 arrays.

These mirror the scalar functions in kmercode.kmer (same masks, same shifts)
but transform whole arrays of codes at once.  k is validated once per call.
"""

import numpy as np

from .encoding import (BASE2BIT_ARRAY, BIT2BASE_ARRAY, ILLEGAL, MAX_CODE,
                       MAX_K, SWAP_STAGES)
from .errors import (CodeOverflowError, IllegalBaseError, KMismatchError,
                     KOverflowError)

_TWO = np.uint64(2)
_THREE = np.uint64(3)
_STAGES = tuple((np.uint64(shift), np.uint64(mask))
                for shift, mask in SWAP_STAGES)


def _check_k(k):
    if not 0 < k <= MAX_K:
        raise KOverflowError(k)


def _as_codes(codes):
    return np.asarray(codes, dtype=np.uint64)


def _swap_cascade(c, k):
    for shift, mask in _STAGES:
        c = ((c >> shift) & mask) | ((c & mask) << shift)
    return c >> np.uint64((MAX_K - k) << 1)


def reverse_array(codes, k):
    """Codes of the reversed k-mers."""
    _check_k(k)
    return _swap_cascade(_as_codes(codes), k)


def complement_array(codes, k):
    """Codes of the complementary k-mers."""
    _check_k(k)
    return _as_codes(codes) ^ np.uint64(MAX_CODE[k])


def revcomp_array(codes, k):
    """Codes of the reverse complements (negate, then reverse)."""
    _check_k(k)
    return _swap_cascade(~_as_codes(codes), k)


def canonical_array(codes, k):
    """Element-wise minimum of each code and its reverse complement code."""
    codes = _as_codes(codes)
    return np.minimum(codes, revcomp_array(codes, k))


def bases_to_bits(seq):
    """Look up the 2-bit code of every byte of seq.

    Returns a uint8 array; bytes outside the alphabet hold ILLEGAL (4).
    """
    if isinstance(seq, str):
        seq = seq.encode('ascii', errors='replace')
    return BASE2BIT_ARRAY[np.frombuffer(bytes(seq), dtype=np.uint8)]


def encode_array(kmers):
    """Encode a list of equal-length k-mers.

    Args:
        kmers: Sequence of k-mers (bytes or str), all of the same length.

    Returns:
        uint64 array of codes, one per k-mer.

    Raises:
        KOverflowError: the k-mer length is outside 1..32.
        KMismatchError: the k-mers differ in length.
        IllegalBaseError: a k-mer contains a non-nucleotide byte.
    """
    if len(kmers) == 0:
        return np.zeros(0, dtype=np.uint64)
    k = len(kmers[0])
    _check_k(k)
    for kmer in kmers:
        if len(kmer) != k:
            raise KMismatchError(f"k-mer lengths differ: {len(kmer)} != {k}")

    bits = np.stack([bases_to_bits(kmer) for kmer in kmers])
    bad = np.argwhere(bits == ILLEGAL)
    if len(bad):
        row, col = bad[0]
        kmer = kmers[row]
        raise IllegalBaseError(kmer[col], int(col))

    codes = np.zeros(len(kmers), dtype=np.uint64)
    for j in range(k):
        codes = (codes << _TWO) | bits[:, j].astype(np.uint64)
    return codes


def decode_array(codes, k):
    """Decode an array of codes into a list of uppercase ACGT bytes.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: a code is larger than 4**k - 1.
    """
    _check_k(k)
    codes = _as_codes(codes)
    if len(codes) and int(codes.max()) > MAX_CODE[k]:
        raise CodeOverflowError(f"code {int(codes.max())} overflows k={k}")

    # column j holds base j of every k-mer
    bits = np.empty((len(codes), k), dtype=np.uint8)
    c = codes.copy()
    for j in range(k - 1, -1, -1):
        bits[:, j] = (c & _THREE).astype(np.uint8)
        c >>= _TWO
    letters = BIT2BASE_ARRAY[bits]
    return [row.tobytes() for row in letters]
