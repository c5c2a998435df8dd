"""2-bit base packing tables shared by every k-mer code operation.

Codes:
    A    0b00
    C    0b01
    G    0b10
    T    0b11

For degenerate IUPAC bases only the first base of the set is kept:

    M  AC    A        S  CG    C
    V  ACG   A        B  CGT   C
    H  ACT   A        Y  CT    C
    R  AG    A        K  GT    G
    D  AGT   A        U  T     T
    W  AT    A
    N  ACGT  A

Lower-case letters map like their upper-case counterparts.  Every other byte
maps to ILLEGAL.  All tables are built once at import time and never mutated.
"""

import numpy as np

MAX_K = 32
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1

# sentinel for bytes outside the nucleotide alphabet
ILLEGAL = 4

BASE_MAP = {'A': 0, 'C': 1, 'G': 2, 'T': 3}

DEGENERATE_MAP = {
    'M': 0, 'V': 0, 'H': 0, 'R': 0, 'D': 0, 'W': 0, 'N': 0,
    'S': 1, 'B': 1, 'Y': 1,
    'K': 2,
    'U': 3,
}


def _build_base2bit():
    table = [ILLEGAL] * 256
    for mapping in (BASE_MAP, DEGENERATE_MAP):
        for base, bits in mapping.items():
            table[ord(base)] = bits
            table[ord(base.lower())] = bits
    return tuple(table)


# byte value -> 2-bit code (or ILLEGAL); a tuple is much faster than a dict here
BASE2BIT = _build_base2bit()
BASE2BIT_ARRAY = np.array(BASE2BIT, dtype=np.uint8)

# 2-bit code -> uppercase base byte
BIT2BASE = b'ACGT'
BIT2BASE_ARRAY = np.frombuffer(BIT2BASE, dtype=np.uint8)

# 2-bit code -> literal bit string, used by KmerCode.bits_string()
BIT2STR = ('00', '01', '10', '11')

# MAX_CODE[k] == 4**k - 1; index 0 is unused
MAX_CODE = (0,) + tuple((1 << (k << 1)) - 1 for k in range(1, MAX_K + 1))

# (shift, mask) pairs for the swap cascade used by reverse / reverse-complement
SWAP_STAGES = (
    (2, 0x3333333333333333),
    (4, 0x0F0F0F0F0F0F0F0F),
    (8, 0x00FF00FF00FF00FF),
    (16, 0x0000FFFF0000FFFF),
    (32, 0x00000000FFFFFFFF),
)
