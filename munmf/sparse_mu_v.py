# License: BSD 3 Clause
"""
munmf Sparse Multiplicative Updates for Non-negative Matrix Factorization.

    SparseMUV(MUNMFBase) : Class for KL-divergence NMF with a sparseness penalty on H
    sparse_mu_v_nmf() : functional wrapper returning ({'W', 'H'}, infos)

The problem of interest is

    min  D(V||W*H) + lambda * sum_ij |H_ij / sigma_i|,   {V, W, H} >= 0

with D the generalized KL-divergence and sigma_i = sqrt(1/n sum_j H_ij^2)
the root mean square of the i-th row of H.

[1] Virtanen, T. (2007), Monaural Sound Source Separation by Nonnegative Matrix
Factorization With Temporal Continuity and Sparseness Criteria, IEEE Trans.
on Audio, Speech, and Language Processing 15(3), 1066-1074.
"""
import numpy as np

from .base import MUNMFBase
from .normalize import normalize_W, normalize_H

__all__ = ["SparseMUV", "sparse_mu_v_nmf"]


class SparseMUV(MUNMFBase):
    """
    SparseMUV(data, num_bases=4, options=None, **kwargs)

    Sparse-MU-V. Factorize a data matrix into two matrices s.t.
    D(data || W*H) + lambda * phi(H) is minimal, where D is the KL-divergence
    and phi(H) penalizes activations relative to their row-wise RMS. Uses
    multiplicative update rules, the penalty gradient is split into its
    positive and negative part.

    Parameters
    ----------
    data : array_like, shape (_data_dimension, _num_samples)
        the input data
    num_bases: int, optional
        Number of bases to compute (column rank of W and row rank of H).
        4 (default)
    options : dict, optional
        'lambda' (0.1) sparseness weight, 'norm_w' (1) / 'norm_h' (0)
        normalization modes, 'myeps' (1e-16) division floor,
        'metric_type' ('kl-div') cost reported in infos['cost'].

    Attributes
    ----------
    W : "data_dimension x num_bases" matrix of basis vectors
    H : "num bases x num_samples" matrix of coefficients
    sigma : "num bases x num_samples" row-wise RMS of H
    infos : per-epoch log, additionally holding 'cost_reg' and 'cost_total'

    Example
    -------
    >>> import numpy as np
    >>> data = np.array([[1.0, 0.0, 2.0], [0.0, 1.0, 1.0]])
    >>> nmf_mdl = SparseMUV(data, num_bases=2, max_epoch=10)
    >>> nmf_mdl.factorize()

    The basis vectors are now stored in nmf_mdl.W, the coefficients in nmf_mdl.H.
    To compute coefficients for an existing set of basis vectors simply copy W
    to nmf_mdl.W, and set compute_w to False:

    >>> data = np.array([[1.5], [1.2]])
    >>> W = np.array([[1.0, 0.0], [0.0, 1.0]])
    >>> nmf_mdl = SparseMUV(data, num_bases=2, max_epoch=20)
    >>> nmf_mdl.W = W
    >>> nmf_mdl.factorize(compute_w=False)
    """

    _METHOD_NAME = 'Sparse-MU-V'
    _LOCAL_OPTIONS = {
        'norm_h': 0,
        'norm_w': 1,
        'lambda': 0.1,
        'myeps': 1e-16,
        'metric_type': 'kl-div',
    }

    def _reconstruct(self):
        return np.maximum(np.dot(self.W, self.H), self.options['myeps'])

    def _compute_sigma(self):
        rms = np.sqrt(np.mean(self.H**2, axis=1, keepdims=True))
        return np.tile(np.maximum(rms, self.options['myeps']), (1, self._num_samples))

    def _prepare(self):
        self._R_rec = self._reconstruct()
        self.sigma = self._compute_sigma()

    def _update_w(self):
        myeps = self.options['myeps']

        # sum over samples of H, i.e. ones(m, n) * H^T
        h_sum = np.sum(self.H, axis=1)[np.newaxis, :]
        self.W = self.W * np.dot(self.data / self._R_rec, self.H.T) / np.maximum(h_sum, myeps)

        if self.options['norm_w'] != 0:
            self.W = normalize_W(self.W, self.options['norm_w'])
        self.W = np.maximum(self.W, myeps)

        self._R_rec = self._reconstruct()

    def _update_h(self):
        myeps = self.options['myeps']
        lamb = self.options['lambda']
        n = self._num_samples
        H = self.H

        # row sums broadcast over samples, i.e. H * ones(n, n)
        h_sum = np.sum(H, axis=1, keepdims=True)
        h_sq_sum = np.sum(H**2, axis=1, keepdims=True)

        # positive and negative part of the penalty gradient
        reg_pos = np.maximum(h_sq_sum / n, myeps)**-0.5
        reg_neg = H * (np.sqrt(n) * h_sum) / np.maximum(h_sq_sum**1.5, myeps)

        H1 = np.dot(self.W.T, self.data / self._R_rec) + lamb * reg_neg
        H2 = np.sum(self.W, axis=0)[:, np.newaxis] + lamb * reg_pos
        self.H = H * H1 / np.maximum(H2, myeps)

        if self.options['norm_h'] != 0:
            self.H = normalize_H(self.H, self.options['norm_h'])
        self.H = np.maximum(self.H, myeps)

        self.sigma = self._compute_sigma()
        self._R_rec = self._reconstruct()

    def _extend_info(self):
        reg_val = self.options['lambda'] * np.sum(np.abs(self.H / self.sigma))
        self.infos.setdefault('cost_reg', []).append(reg_val)
        self.infos.setdefault('cost_total', []).append(self.infos['cost'][-1] + reg_val)


def sparse_mu_v_nmf(V, rank, options=None):
    """ Sparse-MU-V on V with the given rank.

    Returns
    -------
    x : dict with 'W' (m x rank) and 'H' (rank x n)
    infos : dict of per-epoch lists (epoch, cost, cost_reg, cost_total,
            optgap, time, grad_calc_count)
    """
    nmf_mdl = SparseMUV(V, num_bases=rank, options=options)
    nmf_mdl.factorize()
    return {'W': nmf_mdl.W, 'H': nmf_mdl.H}, nmf_mdl.infos
