import itertools
import math
import sys

import numpy as np
import pytest

from crt_permutation import (
    InvalidInput,
    InversePermutation,
    OutOfRange,
    PermutationConfig,
    RandomPermutation,
    SubPermutation,
)

TWELVE_IMAGES = [10, 8, 3, 1, 2, 0, 7, 5, 6, 4, 11, 9]


def _twelve():
    return RandomPermutation.from_sub_permutations(
        [SubPermutation.from_forward([2, 0, 3, 1]), SubPermutation.from_forward([1, 2, 0])]
    )


def test_fixed_tables_twelve():
    p = _twelve()
    assert p.size == len(p) == 12
    assert p.coefficients.moduli == (4, 3)
    # 5 -> residues (1, 2) -> (0, 0) -> 0
    assert p.evaluate(5) == 0
    assert p.evaluate(7) == 5
    assert list(p.iter()) == TWELVE_IMAGES
    for i, v in enumerate(TWELVE_IMAGES):
        assert p.invert(v) == i


def test_bijection_and_inverse_law():
    p = RandomPermutation.new(362_880, rng_obj=3)
    images = np.fromiter(p.iter(), dtype=np.int64, count=p.size)
    assert np.array_equal(np.sort(images), np.arange(p.size))
    for i in range(0, p.size, 997):
        assert p.invert(p.evaluate(i)) == i
        assert p.evaluate(p.invert(i)) == i


def test_bijection_small_domains():
    for n in (2, 7, 12, 60, 300, 1024):
        p = RandomPermutation.new(n, rng_obj=n)
        assert sorted(p.iter()) == list(range(n))
        assert sorted(p.inverse_iter()) == list(range(n))


def test_determinism_for_a_seed():
    a = RandomPermutation.new(300, rng_obj=42)
    b = RandomPermutation.new(300, rng_obj=42)
    assert a == b
    for sa, sb in zip(a.factors, b.factors):
        np.testing.assert_array_equal(sa.forward, sb.forward)
        np.testing.assert_array_equal(sa.inverse, sb.inverse)
    assert list(a.iter()) == list(b.iter())
    c = RandomPermutation.new(300, rng_obj=43)
    assert list(a.iter()) != list(c.iter())


def test_shared_generator_advances():
    g = np.random.default_rng(9)
    a = RandomPermutation.new(300, g)
    b = RandomPermutation.new(300, g)
    assert a != b


def test_single_point():
    p = RandomPermutation.new(1, rng_obj=0)
    assert p.factors == ()
    assert p.evaluate(0) == 0
    assert p.invert(0) == 0
    assert list(p) == [0]
    with pytest.raises(OutOfRange):
        p.evaluate(1)


def test_large_domain_beyond_int64_products():
    n = math.factorial(20)
    p = RandomPermutation.new(n, rng_obj=1)
    assert p.size == n
    for i in (0, 1, 2, 10**18, n - 1):
        v = p.evaluate(i)
        assert 0 <= v < n
        assert p.invert(v) == i


@pytest.mark.parametrize("i", [12, 17, -1])
def test_out_of_range(i):
    p = _twelve()
    with pytest.raises(OutOfRange):
        p.evaluate(i)
    with pytest.raises(OutOfRange):
        p.invert(i)
    with pytest.raises(IndexError):
        p.evaluate(i)


def test_out_of_range_non_integer():
    p = _twelve()
    with pytest.raises(OutOfRange):
        p.evaluate(1.5)
    assert p.evaluate(np.int64(5)) == 0


def test_new_rejects_unsupported_sizes():
    with pytest.raises(InvalidInput):
        RandomPermutation.new(0)
    with pytest.raises(InvalidInput):
        RandomPermutation.new(2 * 1_000_003)
    with pytest.raises(InvalidInput):
        RandomPermutation.new(2**23)
    with pytest.raises(InvalidInput):
        RandomPermutation.new(257, config=PermutationConfig(max_prime=251))
    with pytest.raises(InvalidInput):
        RandomPermutation.new(64 * 3, config=PermutationConfig(max_factor_size=32))


def test_config_validation():
    with pytest.raises(InvalidInput):
        PermutationConfig(max_prime=1)
    with pytest.raises(InvalidInput):
        PermutationConfig(max_factor_size=0)


def test_from_sub_permutations_requires_coprime_sizes():
    with pytest.raises(InvalidInput):
        RandomPermutation.from_sub_permutations(
            [SubPermutation.from_forward([1, 0]), SubPermutation.from_forward([3, 2, 1, 0])]
        )


def test_sequence_is_lazy_and_restartable():
    p = _twelve()
    seq = p.iter()
    assert len(seq) == 12
    assert seq[5] == 0
    assert seq[2:5] == TWELVE_IMAGES[2:5]
    assert seq.take(3) == TWELVE_IMAGES[:3]
    assert seq.take(100) == TWELVE_IMAGES
    assert list(seq) == list(seq) == TWELVE_IMAGES
    with pytest.raises(OutOfRange):
        seq[12]


def test_iterators_have_independent_cursors():
    p = RandomPermutation.new(3_113_510_400, rng_obj=5)
    seq = p.iter()
    it1 = iter(seq)
    it2 = iter(seq)
    for i in range(200):
        assert next(it1) == p.evaluate(i)
    assert it1.position == 200
    assert next(it2) == p.evaluate(0)


def test_iterator_skip():
    p = RandomPermutation.new(3_113_510_400, rng_obj=5)
    it = iter(p.iter())
    for k in range(1, 50):
        it.skip(1_000_000 - 1)
        assert next(it) == p.evaluate(k * 1_000_000 - 1)
    with pytest.raises(InvalidInput):
        it.skip(-1)


def test_iterator_exhausts():
    p = _twelve()
    it = iter(p)
    it.skip(11)
    assert it.remaining == 1
    assert next(it) == TWELVE_IMAGES[11]
    with pytest.raises(StopIteration):
        next(it)
    it.skip(5)
    assert list(it) == []


def test_inverse_view():
    p = _twelve()
    inv = p.inverse()
    assert isinstance(inv, InversePermutation)
    assert inv.size == 12
    assert inv.inverse() is p
    for i in range(12):
        assert inv.evaluate(p.evaluate(i)) == i
        assert inv(i) == p.invert(i)
        assert inv.invert(i) == p.evaluate(i)
    assert list(inv) == list(p.inverse_iter())


# 2**10 * 3**6 * 5**5 * 7**4 * 11**4 * 13**3 * 17**2 * 19**2 * 23, about 2**88
HUGE_N = 2**10 * 3**6 * 5**5 * 7**4 * 11**4 * 13**3 * 17**2 * 19**2 * 23


def test_sequence_api_beyond_sys_maxsize():
    p = RandomPermutation.new(HUGE_N, rng_obj=1)
    assert p.size == HUGE_N > sys.maxsize
    seq = p.inverse_iter()
    assert seq.size == HUGE_N
    with pytest.raises(OverflowError):
        len(seq)
    with pytest.raises(OverflowError):
        len(p)

    head = list(itertools.islice(iter(seq), 4))
    assert head == [p.invert(i) for i in range(4)]
    tail = list(itertools.islice(reversed(p.iter()), 3))
    assert tail == [p.evaluate(HUGE_N - 1), p.evaluate(HUGE_N - 2), p.evaluate(HUGE_N - 3)]
    assert seq[HUGE_N - 1] == p.invert(HUGE_N - 1)
    assert p.iter().take(3) == [p.evaluate(i) for i in range(3)]

    it = iter(p.iter())
    it.skip(HUGE_N - 2)
    assert it.remaining == 2
    assert list(it) == [p.evaluate(HUGE_N - 2), p.evaluate(HUGE_N - 1)]
    for i in (0, 2**63, HUGE_N // 7, HUGE_N - 1):
        assert p.invert(p.evaluate(i)) == i


def test_permutations_are_indexable():
    p = _twelve()
    assert p[5] == 0
    assert p[2:5] == TWELVE_IMAGES[2:5]
    inv = p.inverse()
    for i, v in enumerate(TWELVE_IMAGES):
        assert inv[v] == i
    with pytest.raises(OutOfRange):
        inv[12]


@pytest.mark.parametrize("seed", [-1, 1.5, "7", True, object()])
def test_new_rejects_bad_seeds(seed):
    with pytest.raises(InvalidInput):
        RandomPermutation.new(12, rng_obj=seed)


def test_new_accepts_numpy_integer_seed():
    assert RandomPermutation.new(300, rng_obj=np.int64(42)) == RandomPermutation.new(300, rng_obj=42)
