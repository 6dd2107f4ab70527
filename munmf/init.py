# License: BSD 3 Clause
"""
Initial factors (W, H) for the multiplicative update solvers.

[1] Boutsidis, C. and Gallopoulos, E. (2008), SVD based initialization: A head
start for nonnegative matrix factorization, Pattern Recognition 41(4), 1350-1362.
"""
import numpy as np

from .svd import svd

__all__ = ["generate_init_factors"]


def _init_random(V, rank, rng):
    # add a small value, otherwise MU methods get into trouble as
    # they have difficulties recovering from zero.
    m, n = V.shape
    W = rng.random_sample((m, rank)) + 10**-4
    H = rng.random_sample((rank, n)) + 10**-4
    return W, H


def _init_nndsvd(V, rank, myeps, fill_mean=False):
    m, n = V.shape
    if rank > min(m, n):
        raise ValueError("nndsvd initialization can only be used when "
                         "rank <= min(m, n), got rank=%d for shape %s" % (rank, V.shape))

    U, s, Vt = svd(V, k=rank)
    W = np.zeros((m, rank))
    H = np.zeros((rank, n))

    if s.size > 0:
        # the leading singular triplet is non-negative up to sign
        W[:, 0] = np.sqrt(s[0]) * np.abs(U[:, 0])
        H[0, :] = np.sqrt(s[0]) * np.abs(Vt[0, :])

    for j in range(1, s.size):
        x, y = U[:, j], Vt[j, :]

        # positive and negative parts of the singular vectors
        x_p, y_p = np.maximum(x, 0), np.maximum(y, 0)
        x_n, y_n = np.abs(np.minimum(x, 0)), np.abs(np.minimum(y, 0))

        x_p_nrm, y_p_nrm = np.linalg.norm(x_p), np.linalg.norm(y_p)
        x_n_nrm, y_n_nrm = np.linalg.norm(x_n), np.linalg.norm(y_n)
        m_p, m_n = x_p_nrm * y_p_nrm, x_n_nrm * y_n_nrm

        if m_p > m_n:
            u, v, sigma = x_p / x_p_nrm, y_p / y_p_nrm, m_p
        else:
            u, v, sigma = x_n / x_n_nrm, y_n / y_n_nrm, m_n

        lbd = np.sqrt(s[j] * sigma)
        W[:, j] = lbd * u
        H[j, :] = lbd * v

    if fill_mean:
        avg = V.mean()
        W[W < myeps] = avg
        H[H < myeps] = avg
    else:
        W = np.maximum(W, myeps)
        H = np.maximum(H, myeps)

    return W, H


def generate_init_factors(V, rank, options, rng=None):
    """ Returns initial factors {'W': (m x rank), 'H': (rank x n)}.

    options['x_init'] (a dict holding W and H) takes precedence over
    options['init_alg'], which is one of 'random', 'nndsvd' or 'nndsvda'.
    rng is a numpy RandomState; a new one seeded with
    options['random_state'] is created if omitted.
    """
    V = np.asarray(V, dtype=np.float64)

    x_init = options.get('x_init')
    if x_init is not None:
        return {'W': np.array(x_init['W'], dtype=np.float64),
                'H': np.array(x_init['H'], dtype=np.float64)}

    if rng is None:
        rng = np.random.RandomState(options.get('random_state'))

    init_alg = options.get('init_alg', 'random')
    if init_alg == 'random':
        W, H = _init_random(V, rank, rng)
    elif init_alg == 'nndsvd':
        W, H = _init_nndsvd(V, rank, options['myeps'])
    elif init_alg == 'nndsvda':
        W, H = _init_nndsvd(V, rank, options['myeps'], fill_mean=True)
    else:
        raise ValueError("unknown init_alg %r" % (init_alg,))

    return {'W': W, 'H': H}
