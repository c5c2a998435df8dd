"""Exceptions raised by the checked k-mer code operations.

The ``must_*`` functions never raise these; they assume the caller has
already established the preconditions.
"""


class KmerError(ValueError):
    """Base class for all k-mer code errors."""


class IllegalBaseError(KmerError):
    """A byte outside the IUPAC nucleotide alphabet was found."""

    def __init__(self, base, position=None):
        self.base = base
        self.position = position
        if isinstance(base, int):
            shown = repr(chr(base))
        else:
            shown = repr(base)
        if position is None:
            msg = f"illegal base {shown}"
        else:
            msg = f"illegal base {shown} at position {position}"
        super().__init__(msg)


class LengthOverflowError(KmerError):
    """A requested sub-code length is outside 1..k."""


class KOverflowError(LengthOverflowError):
    """k (or the length of a sequence) is outside 1..32."""

    def __init__(self, k):
        self.k = k
        super().__init__(f"k-mer size (1-32) overflow: {k}")


class PositionOverflowError(KmerError):
    """A 0-based base position is negative or >= k."""


class CodeOverflowError(KmerError):
    """A code is larger than the largest code of its k."""


class KMismatchError(KmerError):
    """Two k-mers that must have the same length do not."""


class NotConsecutiveKmersError(KmerError):
    """Two k-mers claimed to overlap by k-1 bases do not."""
