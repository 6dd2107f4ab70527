# License: BSD 3 Clause
"""
Column/row rescaling of NMF factors.

    normalize_W() : rescale the columns (bases) of W
    normalize_H() : rescale the rows (activations) of H

Mode 1 rescales to unit L1 norm, mode 2 to unit L2 norm. The caller is
responsible for compensating the other factor if W*H has to be preserved.
"""
import numpy as np

__all__ = ["normalize_W", "normalize_H"]

_EPS = np.finfo(float).eps


def _norms(X, mode, axis):
    if mode == 1:
        nrm = np.sum(np.abs(X), axis=axis, keepdims=True)
    elif mode == 2:
        nrm = np.sqrt(np.sum(X**2.0, axis=axis, keepdims=True))
    else:
        raise ValueError("normalization mode must be 1 (L1) or 2 (L2), got %r" % (mode,))
    return np.maximum(nrm, _EPS)


def normalize_W(W, mode):
    """ Returns W with columns of unit L1 (mode=1) or L2 (mode=2) norm.

    >>> import numpy as np
    >>> normalize_W(np.array([[1.0, 2.0], [3.0, 2.0]]), 1)
    array([[0.25, 0.5 ],
           [0.75, 0.5 ]])
    """
    return W / _norms(W, mode, axis=0)


def normalize_H(H, mode):
    """ Returns H with rows of unit L1 (mode=1) or L2 (mode=2) norm.
    """
    return H / _norms(H, mode, axis=1)
