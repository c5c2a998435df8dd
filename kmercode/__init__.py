"""kmercode: k-mers (k <= 32) packed into 64-bit integer codes."""

__version__ = "0.1.0"

from .errors import (KmerError, IllegalBaseError, LengthOverflowError,
                     KOverflowError, PositionOverflowError, CodeOverflowError,
                     KMismatchError, NotConsecutiveKmersError)
from .kmer import (encode, must_encode, decode, must_decode,
                   encode_from_former_kmer, must_encode_from_former_kmer,
                   encode_from_latter_kmer, must_encode_from_latter_kmer,
                   reverse, must_reverse, complement, must_complement,
                   revcomp, must_revcomp, canonical, must_canonical,
                   base_at, must_base_at, prefix, must_prefix,
                   suffix, must_suffix,
                   longest_common_prefix, must_longest_common_prefix,
                   has_prefix, must_has_prefix)
from .kmer_code import KmerCode
from .encoding import MAX_CODE, MAX_K
