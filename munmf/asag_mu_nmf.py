# License: BSD 3 Clause
"""
munmf Asymmetric Stochastic Averaging Gradient Multiplicative Updates.

    ASAGMUNMF(MUNMFBase) : Class for mini-batch NMF with averaged W statistics
    asag_mu_nmf() : functional wrapper returning ({'W', 'H'}, infos)

[1] Serizel, R., Essid, S. and Richard, G. (2016), Mini-batch stochastic approaches
for accelerated multiplicative updates in nonnegative matrix factorisation with
beta-divergence, IEEE 26th International Workshop on Machine Learning for
Signal Processing (MLSP).
"""
import numpy as np

from .base import MUNMFBase

__all__ = ["ASAGMUNMF", "asag_mu_nmf"]


class ASAGMUNMF(MUNMFBase):
    """
    ASAGMUNMF(data, num_bases=4, options=None, **kwargs)

    ASAG-MU-NMF. Factorize a data matrix into two matrices s.t.
    F = | data - W*H | is minimal. The samples are visited in mini-batches;
    every mini-batch gets a single MU step on its activations, after which W
    is updated from exponential moving averages of the positive and negative
    gradient parts (Delta_minus, Delta_plus) accumulated over all mini-batches
    seen so far.

    Parameters
    ----------
    data : array_like, shape (_data_dimension, _num_samples)
        the input data
    num_bases: int, optional
        Number of bases to compute (column rank of W and row rank of H).
        4 (default)
    options : dict, optional
        'lambda' (1) forgetting factor in (0, 1], 'batch_size' (1) mini-batch
        width, 'permute_on' (True) shuffle the samples once before training,
        'random_state' seed of the shuffle and of the initialization.

    Attributes
    ----------
    W : "data_dimension x num_bases" matrix of basis vectors
    H : "num bases x num_samples" matrix of coefficients, in the column order
        of data
    perm_idx : sample order used for training
    infos : per-epoch log, costs are evaluated on the permuted data

    A trailing mini-batch holding fewer than batch_size samples is skipped in
    every epoch, its activations keep their initial values.

    Example
    -------
    >>> import numpy as np
    >>> data = np.array([[1.0, 0.0, 2.0], [0.0, 1.0, 1.0]])
    >>> nmf_mdl = ASAGMUNMF(data, num_bases=2, max_epoch=10, random_state=0)
    >>> nmf_mdl.factorize()
    >>> nmf_mdl.H.shape
    (2, 3)
    """

    _METHOD_NAME = 'ASAG-MU-NMF'
    _LOCAL_OPTIONS = {
        'lambda': 1,
    }

    def _prepare(self):
        # permute samples
        if self.options['permute_on']:
            self.perm_idx = self._rng.permutation(self._num_samples)
        else:
            self.perm_idx = np.arange(self._num_samples)

        self._train_data = self.data[:, self.perm_idx]
        self.H = self.H[:, self.perm_idx]

        self._delta_minus = np.zeros((self._data_dimension, self._num_bases))
        self._delta_plus = np.zeros((self._data_dimension, self._num_bases))

    def _update(self, compute_w=True, compute_h=True):
        V = self._train_data
        batch_size = self.options['batch_size']
        lamb = self.options['lambda']
        myeps = self.options['myeps']
        eps = self._EPS
        W = self.W

        for t in range(0, self._num_samples - batch_size + 1, batch_size):
            vt = V[:, t:t + batch_size]
            ht = self.H[:, t:t + batch_size]

            if compute_h:
                ht = ht * np.dot(W.T, vt) / np.maximum(np.dot(W.T, np.dot(W, ht)), myeps)
                ht = ht + (ht < eps) * eps

            if compute_w:
                self._delta_minus = (1 - lamb) * self._delta_minus + lamb * np.dot(vt, ht.T)
                self._delta_plus = (1 - lamb) * self._delta_plus + lamb * np.dot(W, np.dot(ht, ht.T))

                W = W * (self._delta_minus / np.maximum(self._delta_plus, myeps))
                W = W + (W < eps) * eps

            # store new h
            self.H[:, t:t + batch_size] = ht

            self.grad_calc_count += self._data_dimension * batch_size

        self.W = W

    def _finalize(self):
        # back to the column order of data
        self._H_perm = self.H
        self.H = np.empty_like(self._H_perm)
        self.H[:, self.perm_idx] = self._H_perm


def asag_mu_nmf(V, rank, options=None):
    """ ASAG-MU-NMF on V with the given rank.

    Returns
    -------
    x : dict with 'W' (m x rank) and 'H' (rank x n), H in the column order of V
    infos : dict of per-epoch lists (epoch, cost, optgap, time, grad_calc_count)
    """
    nmf_mdl = ASAGMUNMF(V, num_bases=rank, options=options)
    nmf_mdl.factorize()
    return {'W': nmf_mdl.W, 'H': nmf_mdl.H}, nmf_mdl.infos
