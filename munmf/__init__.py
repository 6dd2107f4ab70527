# License: BSD 3 Clause
"""
munmf: multiplicative update solvers for non-negative matrix factorization.

    SparseMUV / sparse_mu_v_nmf : KL-divergence NMF with a sparseness penalty on H
    ASAGMUNMF / asag_mu_nmf : mini-batch NMF with asymmetric stochastic averaging
"""
from .base import MUNMFBase, get_nmf_default_options, merge_options
from .init import generate_init_factors
from .metrics import calc_cost, store_nmf_info, check_stop_condition
from .normalize import normalize_W, normalize_H
from .sparse_mu_v import SparseMUV, sparse_mu_v_nmf
from .asag_mu_nmf import ASAGMUNMF, asag_mu_nmf

__version__ = "0.1.0"
