# License: BSD 3 Clause
"""
Dense Singular Value Decomposition via the eigen-decomposition of the
smaller Gram matrix. Used to seed NNDSVD initialization.

    eighk() : ordered eigenpairs of a symmetric matrix
    svd() : thin SVD, data = U * diag(s) * V
"""
import numpy as np
from numpy.linalg import eigh

__all__ = ["eighk", "svd"]

_EPS = np.finfo(float).eps


def eighk(M, k=0):
    """ Returns ordered eigenvectors of a squared matrix. Too low eigenvectors
    are ignored. Optionally only the first k vectors/values are returned.
    Arguments
    ---------
    M - squared symmetric matrix
    k - (default 0): number of eigenvectors/values to return
    Returns
    -------
    w : [:k] eigenvalues, descending
    v : [:k] eigenvectors (columns)
    """
    values, vectors = eigh(M)

    # get rid of too low eigenvalues
    keep = np.where(values > _EPS)[0]
    values = values[keep]
    vectors = vectors[:, keep]

    # argsort sorts in ascending order -> access is backwards
    idx = np.argsort(values)[::-1]
    values = values[idx]
    vectors = vectors[:, idx]

    if k > 0:
        values = values[:k]
        vectors = vectors[:, :k]

    return values, vectors


def svd(data, k=0):
    """ Thin SVD of a dense matrix.

    The Gram matrix of the smaller side is decomposed, so the cost is
    dominated by one (min(m,n) x min(m,n)) eigen-decomposition.

    Parameters
    ----------
    data : array_like, shape (m, n)
    k : int, optional
        number of singular triplets to keep (0 keeps all non-negligible ones)

    Returns
    -------
    U : (m, r) left singular vectors
    s : (r,) singular values, descending
    V : (r, n) right singular vectors (rows)

    Singular values below sqrt(machine epsilon) are dropped, thus r can be
    smaller than k for rank deficient data.

    >>> import numpy as np
    >>> data = np.array([[3.0, 0.0], [0.0, 2.0], [0.0, 0.0]])
    >>> U, s, V = svd(data)
    >>> np.allclose(np.dot(U * s, V), data)
    True
    """
    data = np.asarray(data, dtype=np.float64)
    rows, cols = data.shape

    if rows >= cols:
        values, vectors = eighk(np.dot(data.T, data), k=k)
        s = np.sqrt(values)
        V = vectors.T
        U = np.dot(data, vectors) / s
    else:
        values, U = eighk(np.dot(data, data.T), k=k)
        s = np.sqrt(values)
        V = np.dot(U.T, data) / s[:, np.newaxis]

    return U, s, V
