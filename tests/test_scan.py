"""
Unit tests for sliding-window k-mer scanning (python and numpy backends).
"""

import random

import pytest

from kmercode import kmer as km
from kmercode.errors import IllegalBaseError, KOverflowError
from kmercode.scan import iter_kmer_codes, kmer_codes


def random_seq(n, seed=5):
    rng = random.Random(seed)
    return bytes(rng.choice(b"ACGTacgt") for _ in range(n))


def direct_codes(seq, k, canonical=False):
    codes = [km.encode(seq[i:i + k]) for i in range(len(seq) - k + 1)]
    if canonical:
        codes = [km.canonical(c, k) for c in codes]
    return codes


class TestBackendsMatchDirectEncoding:
    """Both backends give encode() of each window."""

    @pytest.mark.parametrize("k", [1, 3, 11, 31, 32])
    @pytest.mark.parametrize("canonical", [False, True])
    def test_python_backend(self, k, canonical):
        seq = random_seq(200)
        got = list(iter_kmer_codes(seq, k, canonical=canonical))
        assert [pos for pos, _ in got] == list(range(len(seq) - k + 1))
        assert [code for _, code in got] == direct_codes(seq, k, canonical)

    @pytest.mark.parametrize("k", [1, 3, 11, 31, 32])
    @pytest.mark.parametrize("canonical", [False, True])
    def test_numpy_backend(self, k, canonical):
        seq = random_seq(200)
        assert kmer_codes(seq, k, canonical=canonical).tolist() == \
            direct_codes(seq, k, canonical)

    def test_str_input(self):
        assert kmer_codes("ACGTA", 4).tolist() == [27, 108]
        assert list(iter_kmer_codes("ACGTA", 4)) == [(0, 27), (1, 108)]


class TestScanEdgeCases:
    """Short sequences, bad k and non-nucleotide bytes."""

    def test_sequence_shorter_than_k(self):
        assert list(iter_kmer_codes(b"ACG", 4)) == []
        assert len(kmer_codes(b"ACG", 4)) == 0

    def test_k_overflow(self):
        with pytest.raises(KOverflowError):
            list(iter_kmer_codes(b"ACGT", 0))
        with pytest.raises(KOverflowError):
            kmer_codes(b"ACGT", 33)

    def test_illegal_raises(self):
        with pytest.raises(IllegalBaseError) as excinfo:
            list(iter_kmer_codes(b"ACGT-ACGT", 3))
        assert excinfo.value.position == 4
        with pytest.raises(IllegalBaseError) as excinfo:
            kmer_codes(b"ACGT-ACGT", 3)
        assert excinfo.value.position == 4

    def test_skip_illegal(self):
        seq = b"ACGT-ACG.TTTT"
        got = list(iter_kmer_codes(seq, 3, skip_illegal=True))
        expected = [(i, km.encode(seq[i:i + 3])) for i in (0, 1, 5, 9, 10)]
        assert got == expected

    def test_bad_arguments_rejected_before_iteration(self):
        with pytest.raises(KOverflowError):
            iter_kmer_codes(b"ACGT", 0)
        with pytest.raises(IllegalBaseError):
            iter_kmer_codes("ACÉT", 2)
