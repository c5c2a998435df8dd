"""KmerCode: a k-mer code paired with its k."""

from dataclasses import dataclass

from . import kmer as kmers
from .encoding import BIT2STR, MAX_CODE, MAX_K
from .errors import CodeOverflowError, KMismatchError, KOverflowError


@dataclass(frozen=True)
class KmerCode:
    """A k-mer in 64 bits.

    Two KmerCodes are equal only if both code and k match: the same code
    under different k is a different k-mer.  All transforms return new
    KmerCode objects with the same k.
    """

    code: int
    k: int

    def __post_init__(self):
        if not 0 < self.k <= MAX_K:
            raise KOverflowError(self.k)
        if not 0 <= self.code <= MAX_CODE[self.k]:
            raise CodeOverflowError(f"code {self.code} overflows k={self.k}")

    # -- construction -------------------------------------------------------

    @classmethod
    def from_kmer(cls, kmer):
        """Encode a k-mer given as bytes or str."""
        return cls(kmers.encode(kmer), len(kmer))

    @classmethod
    def from_former(cls, kmer, left_kmer, former):
        """Compute the KmerCode of kmer from the KmerCode of its left neighbour.

        Args:
            kmer:      The k-mer, equal to left_kmer[1:] + one new base.
            left_kmer: The previous window.
            former:    KmerCode of left_kmer.

        Raises KMismatchError / NotConsecutiveKmersError / IllegalBaseError
        as encode_from_former_kmer() does.
        """
        if former.k != len(kmer):
            raise KMismatchError(
                f"former k-mer has k={former.k}, expected {len(kmer)}")
        return cls(kmers.encode_from_former_kmer(kmer, left_kmer, former.code),
                   len(kmer))

    @classmethod
    def must_from_former(cls, kmer, left_kmer, former):
        """Like from_former(), assuming kmer and left_kmer are consecutive."""
        return cls(
            kmers.must_encode_from_former_kmer(kmer, left_kmer, former.code),
            len(kmer))

    # -- transforms ---------------------------------------------------------

    def rev(self):
        """The reversed k-mer."""
        return KmerCode(kmers.must_reverse(self.code, self.k), self.k)

    def comp(self):
        """The complementary k-mer."""
        return KmerCode(kmers.must_complement(self.code, self.k), self.k)

    def revcomp(self):
        """The reverse complement k-mer."""
        return KmerCode(kmers.must_revcomp(self.code, self.k), self.k)

    def canonical(self):
        """The smaller of this k-mer and its reverse complement, by code."""
        code = kmers.must_canonical(self.code, self.k)
        if code == self.code:
            return self
        return KmerCode(code, self.k)

    # -- sub-k-mers ---------------------------------------------------------

    def base_at(self, i):
        """2-bit code of the base at 0-based position i."""
        return kmers.base_at(self.code, self.k, i)

    def prefix(self, n):
        """The first n bases as an n-mer KmerCode."""
        return KmerCode(kmers.prefix(self.code, self.k, n), n)

    def suffix(self, i):
        """The bases from 0-based position i on, as a (k-i)-mer KmerCode."""
        return KmerCode(kmers.suffix(self.code, self.k, i), self.k - i)

    def has_prefix(self, other):
        """Whether this k-mer starts with the k-mer other."""
        return kmers.must_has_prefix(self.code, other.code, self.k, other.k)

    def longest_common_prefix(self, other):
        """Length of the longest common prefix with the k-mer other."""
        return kmers.must_longest_common_prefix(self.code, self.k,
                                                other.code, other.k)

    # -- rendering ----------------------------------------------------------

    def bytes(self):
        """The k-mer as uppercase ACGT bytes."""
        return kmers.must_decode(self.code, self.k)

    def __str__(self):
        return kmers.must_decode(self.code, self.k).decode('ascii')

    def bits_string(self):
        """The k-mer as a string of bit pairs, e.g. ACGT -> '00011011'."""
        return ''.join(BIT2STR[kmers.must_base_at(self.code, self.k, i)]
                       for i in range(self.k))
