"""Encode k-mers (k <= 32) into 64-bit integer codes and manipulate the codes.

A code holds its k-mer in the low 2*k bits, first base in the highest pair:

    encode("ACGT") == 0b00_01_10_11 == 27

The same integer means different k-mers for different k, so every operation
takes k alongside the code.

Checked vs. trusting functions:
  - The plain functions (encode, decode, reverse, ...) validate k, positions,
    lengths and code ranges, and raise a KmerError subclass on bad input.
  - The must_* functions do the same bit arithmetic without any validation.
    They exist for tight loops where the caller has already checked its
    inputs (e.g. sliding a window over a validated sequence).  Given bad
    input they silently return meaningless values or raise whatever Python
    raises (IndexError, ValueError), exactly like unchecked indexing.

Symbols may be given as bytes, bytearray, memoryview or ASCII str.
"""

from .encoding import (BASE2BIT, BIT2BASE, ILLEGAL, MAX_CODE, MAX_K,
                       SWAP_STAGES, WORD_BITS, WORD_MASK)
from .errors import (IllegalBaseError, KMismatchError, KOverflowError,
                     CodeOverflowError, LengthOverflowError,
                     NotConsecutiveKmersError, PositionOverflowError)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _as_bytes(kmer):
    """Return kmer as a bytes-like object, rejecting non-ASCII text."""
    if isinstance(kmer, str):
        try:
            return kmer.encode('ascii')
        except UnicodeEncodeError as e:
            raise IllegalBaseError(kmer[e.start], e.start) from None
    return kmer


def _base_bits(base):
    """2-bit code of a single base given as an int byte or a 1-char str."""
    if isinstance(base, str):
        base = ord(base)
        if base > 255:
            return ILLEGAL
    return BASE2BIT[base]


def _check_k(k):
    if not 0 < k <= MAX_K:
        raise KOverflowError(k)


def _check_code(code, k):
    _check_k(k)
    if not 0 <= code <= MAX_CODE[k]:
        raise CodeOverflowError(f"code {code} overflows k={k}")


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------

def encode(kmer):
    """Encode a k-mer (1 <= k <= 32) to its 2-bit packed code.

    Degenerate bases are replaced by the first base of their set (see
    kmercode.encoding).

    Raises:
        KOverflowError: kmer is empty or longer than 32 bases.
        IllegalBaseError: kmer contains a byte outside the IUPAC alphabet.
    """
    kmer = _as_bytes(kmer)
    if not 0 < len(kmer) <= MAX_K:
        raise KOverflowError(len(kmer))

    code = 0
    for i, b in enumerate(kmer):
        v = BASE2BIT[b]
        if v == ILLEGAL:
            raise IllegalBaseError(b, i)
        code = (code << 2) | v
    return code


def must_encode(kmer):
    """Like encode(), but assumes 1 <= len(kmer) <= 32 and only legal bases."""
    if isinstance(kmer, str):
        kmer = kmer.encode('ascii')
    code = 0
    for b in kmer:
        code = (code << 2) | BASE2BIT[b]
    return code


# ---------------------------------------------------------------------------
# Incremental re-encoding of a sliding window
# ---------------------------------------------------------------------------

def must_encode_from_former_kmer(kmer, left_kmer, left_code):
    """Code of kmer from the code of the k-mer one base to its left.

    kmer must equal left_kmer[1:] plus one new last base; this is not
    checked.  Only the new last base is looked up, the rest is shifted out of
    left_code: keep the lower (k-1)*2 bits, shift left by 2, add the new base.

    Raises:
        IllegalBaseError: the new last base is not a nucleotide.
    """
    v = _base_bits(kmer[-1])
    if v == ILLEGAL:
        raise IllegalBaseError(kmer[-1], len(kmer) - 1)
    return ((left_code & ((1 << ((len(kmer) - 1) << 1)) - 1)) << 2) | v


def encode_from_former_kmer(kmer, left_kmer, left_code):
    """Checked version of must_encode_from_former_kmer().

    Raises:
        KOverflowError: kmer is empty or longer than 32 bases.
        KMismatchError: kmer and left_kmer differ in length.
        NotConsecutiveKmersError: kmer[:-1] != left_kmer[1:].
        CodeOverflowError: the neighbour code does not fit k.
        IllegalBaseError: the new last base is not a nucleotide.
    """
    kmer = _as_bytes(kmer)
    left_kmer = _as_bytes(left_kmer)
    if not 0 < len(kmer) <= MAX_K:
        raise KOverflowError(len(kmer))
    if len(kmer) != len(left_kmer):
        raise KMismatchError(
            f"k-mer lengths differ: {len(kmer)} != {len(left_kmer)}")
    if bytes(kmer[:-1]) != bytes(left_kmer[1:]):
        raise NotConsecutiveKmersError(
            f"{bytes(left_kmer)!r} is not the left neighbour of {bytes(kmer)!r}")
    _check_code(left_code, len(kmer))
    return must_encode_from_former_kmer(kmer, left_kmer, left_code)


def must_encode_from_latter_kmer(kmer, right_kmer, right_code):
    """Code of kmer from the code of the k-mer one base to its right.

    kmer must equal one new first base plus right_kmer[:-1]; this is not
    checked.

    Raises:
        IllegalBaseError: the new first base is not a nucleotide.
    """
    v = _base_bits(kmer[0])
    if v == ILLEGAL:
        raise IllegalBaseError(kmer[0], 0)
    return (v << ((len(kmer) - 1) << 1)) | (right_code >> 2)


def encode_from_latter_kmer(kmer, right_kmer, right_code):
    """Checked version of must_encode_from_latter_kmer().

    Raises:
        KOverflowError: kmer is empty or longer than 32 bases.
        KMismatchError: kmer and right_kmer differ in length.
        NotConsecutiveKmersError: kmer[1:] != right_kmer[:-1].
        CodeOverflowError: the neighbour code does not fit k.
        IllegalBaseError: the new first base is not a nucleotide.
    """
    kmer = _as_bytes(kmer)
    right_kmer = _as_bytes(right_kmer)
    if not 0 < len(kmer) <= MAX_K:
        raise KOverflowError(len(kmer))
    if len(kmer) != len(right_kmer):
        raise KMismatchError(
            f"k-mer lengths differ: {len(kmer)} != {len(right_kmer)}")
    if bytes(kmer[1:]) != bytes(right_kmer[:-1]):
        raise NotConsecutiveKmersError(
            f"{bytes(right_kmer)!r} is not the right neighbour of {bytes(kmer)!r}")
    _check_code(right_code, len(kmer))
    return must_encode_from_latter_kmer(kmer, right_kmer, right_code)


# ---------------------------------------------------------------------------
# Reverse, complement, reverse complement, canonical
# ---------------------------------------------------------------------------
#
# Reversal swaps 2-bit groups, then 4-, 8-, 16- and 32-bit groups across the
# whole 64-bit word, which leaves the k-mer in the high 2*k bits.  The final
# right shift by (32-k)*2 moves it back down.

def _swap(c):
    for shift, mask in SWAP_STAGES:
        c = ((c >> shift) & mask) | ((c & mask) << shift)
    return c


def must_reverse(code, k):
    """Like reverse(), but k and code are not checked."""
    return _swap(code) >> ((MAX_K - k) << 1)


def reverse(code, k):
    """Code of the reversed k-mer.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: code is negative or larger than 4**k - 1.
    """
    _check_code(code, k)
    return must_reverse(code, k)


def must_complement(code, k):
    """Like complement(), but k and code are not checked."""
    return code ^ ((1 << (k << 1)) - 1)


def complement(code, k):
    """Code of the complementary k-mer (A<->T, C<->G).

    With A=00, C=01, G=10, T=11 complementing a base is negating its two
    bits, so the whole k-mer is complemented by one XOR.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: code is negative or larger than 4**k - 1.
    """
    _check_code(code, k)
    return code ^ MAX_CODE[k]


def must_revcomp(code, k):
    """Like revcomp(), but k and code are not checked."""
    return _swap(code ^ WORD_MASK) >> ((MAX_K - k) << 1)


def revcomp(code, k):
    """Code of the reverse complement.

    Same as reverse(complement(code, k), k) but in one pass: the whole word
    is negated first, then reversed.  The negated padding bits end up below
    the k-mer and are shifted out.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: code is negative or larger than 4**k - 1.
    """
    _check_code(code, k)
    return must_revcomp(code, k)


def must_canonical(code, k):
    """Like canonical(), but k and code are not checked."""
    rc = must_revcomp(code, k)
    if rc < code:
        return rc
    return code


def canonical(code, k):
    """Code of the canonical k-mer: the smaller of code and its revcomp code.

    The comparison is between the packed integers.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: code is negative or larger than 4**k - 1.
    """
    _check_code(code, k)
    return must_canonical(code, k)


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------

def must_decode(code, k):
    """Like decode(), but k and code are not checked."""
    kmer = bytearray(k)
    for i in range(k - 1, -1, -1):
        kmer[i] = BIT2BASE[code & 3]
        code >>= 2
    return bytes(kmer)


def decode(code, k):
    """Decode a code back to its k-mer as uppercase ACGT bytes.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: code is negative or larger than 4**k - 1.
    """
    _check_code(code, k)
    return must_decode(code, k)


# ---------------------------------------------------------------------------
# Sub-k-mer operations
# ---------------------------------------------------------------------------

def must_base_at(code, k, i):
    """Like base_at(), but k, code and i are not checked."""
    return (code >> ((k - i - 1) << 1)) & 3


def base_at(code, k, i):
    """2-bit code of the base at 0-based position i.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: code is negative or larger than 4**k - 1.
        PositionOverflowError: i is outside 0..k-1.
    """
    _check_code(code, k)
    if not 0 <= i < k:
        raise PositionOverflowError(f"base position {i} overflows k={k}")
    return (code >> ((k - i - 1) << 1)) & 3


def must_prefix(code, k, n):
    """Like prefix(), but k, code and n are not checked."""
    return code >> ((k - n) << 1)


def prefix(code, k, n):
    """Code of the first n bases, as an n-mer.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: code is negative or larger than 4**k - 1.
        LengthOverflowError: n is outside 1..k.
    """
    _check_code(code, k)
    if not 0 < n <= k:
        raise LengthOverflowError(f"prefix length {n} overflows k={k}")
    return code >> ((k - n) << 1)


def must_suffix(code, k, i):
    """Like suffix(), but k, code and i are not checked."""
    return code & ((1 << ((k - i) << 1)) - 1)


def suffix(code, k, i):
    """Code of the suffix starting at 0-based position i, as a (k-i)-mer.

    Raises:
        KOverflowError: k is outside 1..32.
        CodeOverflowError: code is negative or larger than 4**k - 1.
        PositionOverflowError: i is outside 0..k-1.
    """
    _check_code(code, k)
    if not 0 <= i < k:
        raise PositionOverflowError(f"suffix position {i} overflows k={k}")
    return code & ((1 << ((k - i) << 1)) - 1)


def must_longest_common_prefix(code1, k1, code2, k2):
    """Like longest_common_prefix(), but k1, k2 and the codes are not checked."""
    # most of the time k1 >= k2
    if k1 >= k2:
        code1 >>= (k1 - k2) << 1
        d = MAX_K - k2
    else:
        code2 >>= (k2 - k1) << 1
        d = MAX_K - k1
    return ((WORD_BITS - (code1 ^ code2).bit_length()) >> 1) - d


def longest_common_prefix(code1, k1, code2, k2):
    """Length of the longest common prefix of two k-mers of any lengths.

    The longer code is cut down to the length of the shorter one, then the
    leading zero bit pairs of the XOR of the two, counted within the compared
    width, give the shared prefix length.  The result is at most min(k1, k2).

    Raises:
        KOverflowError: k1 or k2 is outside 1..32.
        CodeOverflowError: a code does not fit its k.
    """
    _check_code(code1, k1)
    _check_code(code2, k2)
    return must_longest_common_prefix(code1, k1, code2, k2)


def must_has_prefix(code, prefix_code, k, kp):
    """Like has_prefix(), but k, kp and the codes are not checked."""
    if k < kp:
        return False
    return code >> ((k - kp) << 1) == prefix_code


def has_prefix(code, prefix_code, k, kp):
    """Whether the k-mer (code, k) starts with the kp-mer prefix_code.

    Raises:
        KOverflowError: k or kp is outside 1..32.
        CodeOverflowError: code does not fit k, or prefix_code does not fit kp.
    """
    _check_code(code, k)
    _check_code(prefix_code, kp)
    return must_has_prefix(code, prefix_code, k, kp)
