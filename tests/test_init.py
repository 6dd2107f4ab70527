import numpy as np
import pytest

from munmf import (ASAGMUNMF, SparseMUV, generate_init_factors, get_nmf_default_options,
                   merge_options, normalize_H, normalize_W)
from munmf.svd import svd


def _options(**kwargs):
    options = get_nmf_default_options()
    options.update(kwargs)
    return options


def test_random_init_is_positive_and_seeded():
    V = np.random.RandomState(0).rand(5, 8)
    f1 = generate_init_factors(V, 3, _options(random_state=42))
    f2 = generate_init_factors(V, 3, _options(random_state=42))

    assert f1['W'].shape == (5, 3)
    assert f1['H'].shape == (3, 8)
    assert np.all(f1['W'] > 0)
    assert np.all(f1['H'] > 0)
    np.testing.assert_array_equal(f1['W'], f2['W'])
    np.testing.assert_array_equal(f1['H'], f2['H'])


def test_x_init_is_copied():
    W = np.ones((3, 2))
    H = np.ones((2, 4))
    factors = generate_init_factors(np.ones((3, 4)), 2, _options(x_init={'W': W, 'H': H}))
    factors['W'][0, 0] = 5.0

    assert W[0, 0] == 1.0
    np.testing.assert_array_equal(factors['H'], H)


def test_nndsvd_recovers_rank_one_data():
    u = np.array([1.0, 2.0, 0.5, 3.0])
    v = np.array([0.5, 1.0, 4.0])
    V = np.outer(u, v)
    factors = generate_init_factors(V, 1, _options(init_alg='nndsvd'))

    np.testing.assert_allclose(np.dot(factors['W'], factors['H']), V, rtol=1e-10)


@pytest.mark.parametrize('init_alg', ['nndsvd', 'nndsvda'])
def test_nndsvd_factors_respect_floor(init_alg):
    V = np.random.RandomState(3).rand(6, 9)
    options = _options(init_alg=init_alg)
    factors = generate_init_factors(V, 4, options)

    assert factors['W'].shape == (6, 4)
    assert factors['H'].shape == (4, 9)
    assert np.all(factors['W'] >= options['myeps'])
    assert np.all(factors['H'] >= options['myeps'])


def test_nndsvd_rank_too_large_raises():
    with pytest.raises(ValueError):
        generate_init_factors(np.ones((3, 5)), 4, _options(init_alg='nndsvd'))


def test_unknown_init_alg_raises():
    with pytest.raises(ValueError):
        generate_init_factors(np.ones((3, 5)), 2, _options(init_alg='kmeans'))


@pytest.mark.parametrize('shape', [(4, 6), (6, 4)])
def test_svd_reconstructs_data(shape):
    data = np.random.RandomState(1).rand(*shape)
    U, s, V = svd(data)

    assert np.all(np.diff(s) <= 0)
    np.testing.assert_allclose(np.dot(U * s, V), data, atol=1e-10)


def test_svd_truncates():
    data = np.random.RandomState(2).rand(5, 7)
    U, s, V = svd(data, k=2)

    assert U.shape == (5, 2)
    assert s.shape == (2,)
    assert V.shape == (2, 7)


def test_normalize_modes():
    X = np.array([[1.0, 3.0], [2.0, 4.0]])

    np.testing.assert_allclose(normalize_W(X, 1).sum(axis=0), [1.0, 1.0])
    np.testing.assert_allclose(np.linalg.norm(normalize_W(X, 2), axis=0), [1.0, 1.0])
    np.testing.assert_allclose(normalize_H(X, 1).sum(axis=1), [1.0, 1.0])
    np.testing.assert_allclose(np.linalg.norm(normalize_H(X, 2), axis=1), [1.0, 1.0])

    with pytest.raises(ValueError):
        normalize_W(X, 3)


def test_merge_options_is_right_biased_and_pure():
    defaults = {'lambda': 0.1, 'verbose': 0}
    merged = merge_options(defaults, {'lambda': 1, 'batch_size': 4})

    assert merged == {'lambda': 1, 'verbose': 0, 'batch_size': 4}
    assert defaults == {'lambda': 0.1, 'verbose': 0}
    assert merge_options(defaults, None) == defaults


def test_solver_option_precedence():
    V = np.ones((3, 4))

    sparse = SparseMUV(V, num_bases=2, options={'max_epoch': 5}, max_epoch=7)
    assert sparse.options['max_epoch'] == 7
    assert sparse.options['metric_type'] == 'kl-div'
    assert sparse.options['lambda'] == 0.1
    assert sparse.options['norm_w'] == 1

    asag = ASAGMUNMF(V, num_bases=2, options={'batch_size': 2})
    assert asag.options['lambda'] == 1
    assert asag.options['metric_type'] == 'euc'
    assert asag.options['batch_size'] == 2
