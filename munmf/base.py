# License: BSD 3 Clause
"""
munmf base class used by the multiplicative update (MU) solvers.

    MUNMFBase : epoch loop (stop check -> update -> record) shared by all solvers
    get_nmf_default_options() : default options
    merge_options() : right-biased shallow merge of option dicts
"""
import time
import logging

import numpy as np

from .init import generate_init_factors
from .metrics import store_nmf_info, check_stop_condition, display_info, display_stop_reason

__all__ = ["MUNMFBase", "get_nmf_default_options", "merge_options"]

_EPS = np.finfo(float).eps


def get_nmf_default_options():
    """ Returns a fresh dict holding the default solver options.
    """
    return {
        'max_epoch': 100,
        'max_time': np.inf,
        'tol_optgap': 1.0e-12,
        'f_opt': -np.inf,
        'tol_cost_change': 0,
        'verbose': 0,
        'verbose_disp_epoch': 1,
        'metric_type': 'euc',
        'init_alg': 'random',
        'x_init': None,
        'random_state': None,
        'myeps': 1e-16,
        'norm_w': 0,
        'norm_h': 0,
        'lambda': 0.1,
        'permute_on': True,
        'batch_size': 1,
    }


def merge_options(defaults, overrides):
    """ Right-biased shallow merge; neither argument is modified.

    >>> merge_options({'lambda': 0.1, 'verbose': 0}, {'lambda': 1})
    {'lambda': 1, 'verbose': 0}
    """
    merged = dict(defaults)
    if overrides:
        merged.update(overrides)
    return merged


class MUNMFBase():
    """
    MUNMFBase(data, num_bases=4, options=None, **kwargs)

    Base class for the MU solvers. Does nothing useful apart from running the
    epoch loop; subclasses override the update hooks.

    Parameters
    ----------
    data : array_like, shape (_data_dimension, _num_samples)
        the non-negative input data
    num_bases : int, optional
        rank of the factorization, 4 (default)
    options : dict, optional
        solver options, merged over get_nmf_default_options() and the
        solver's own defaults; keyword arguments override options.

    Attributes
    ----------
    W : "data_dimension x num_bases" matrix of basis vectors
    H : "num bases x num_samples" matrix of coefficients
    infos : dict of per-epoch lists (epoch, cost, optgap, time, grad_calc_count)
    epoch : number of completed epochs
    grad_calc_count : number of sampled data elements so far
    """
    # some small value
    _EPS = _EPS

    _METHOD_NAME = 'MU-NMF'
    _LOCAL_OPTIONS = {}

    def __init__(self, data, num_bases=4, options=None, **kwargs):

        def setup_logging():
            # create logger
            self._logger = logging.getLogger("munmf")

            # add ch to logger
            if len(self._logger.handlers) < 1:
                # create console handler and set level to debug
                ch = logging.StreamHandler()
                ch.setLevel(logging.DEBUG)
                # create formatter
                formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

                # add formatter to ch
                ch.setFormatter(formatter)

                self._logger.addHandler(ch)

        setup_logging()

        # set variables
        self.data = np.asarray(data, dtype=np.float64)
        self._num_bases = num_bases
        self._data_dimension, self._num_samples = self.data.shape

        resolved = merge_options(get_nmf_default_options(), self._LOCAL_OPTIONS)
        resolved = merge_options(resolved, options)
        self.options = merge_options(resolved, kwargs)

        self._rng = np.random.RandomState(self.options['random_state'])
        self._train_data = self.data
        self.infos = None
        self.epoch = 0
        self.grad_calc_count = 0

    def _init_factors(self):
        """ Create W and H if they don't already exist.
        -> any custom initialization to W,H should be done before
        """
        if not hasattr(self, 'W') or not hasattr(self, 'H'):
            init_factors = generate_init_factors(self.data, self._num_bases,
                                                 self.options, rng=self._rng)
            if not hasattr(self, 'W'):
                self.W = init_factors['W']
            if not hasattr(self, 'H'):
                self.H = init_factors['H']

        self.W = np.asarray(self.W, dtype=np.float64)
        self.H = np.asarray(self.H, dtype=np.float64)

    def _prepare(self):
        """ Overwrite for solver state set up once per run.
        """
        pass

    def _update_w(self):
        """ Overwrite for updating W.
        """
        pass

    def _update_h(self):
        """ Overwrite for updating H.
        """
        pass

    def _update(self, compute_w=True, compute_h=True):
        """ One epoch of updates. Solvers that interleave W and H updates
        within an epoch overwrite this instead of _update_w/_update_h.
        """
        if compute_w:
            self._update_w()

        if compute_h:
            self._update_h()

        self.grad_calc_count += self._data_dimension * self._num_samples

    def _extend_info(self):
        """ Overwrite to append solver specific fields to the latest record.
        """
        pass

    def _finalize(self):
        """ Overwrite for post-processing once the loop stopped.
        """
        pass

    def _store_info(self, elapsed_time):
        self.infos, cost, optgap = store_nmf_info(
            self._train_data, self.W, self.H, self.options, self.infos,
            self.epoch, self.grad_calc_count, elapsed_time)
        self._extend_info()
        return cost, optgap

    def factorize(self, compute_w=True, compute_h=True):
        """ Factorize s.t. WH = data

        Parameters
        ----------
        compute_w : bool
                iteratively update values for W.
        compute_h : bool
                iteratively update values for H.

        Updated Values
        --------------
        .W : updated values for W.
        .H : updated values for H.
        .infos : per-epoch log, see store_nmf_info().
        """
        options = self.options

        if options['verbose'] > 0:
            self._logger.setLevel(logging.INFO)
        else:
            self._logger.setLevel(logging.ERROR)

        self._init_factors()

        self.epoch = 0
        self.grad_calc_count = 0
        self.infos = None
        self._train_data = self.data

        self._logger.info('# %s: started ...' % self._METHOD_NAME)

        self._prepare()

        # store initial info
        self._store_info(0)
        display_info(self._METHOD_NAME, self.epoch, self.infos, options)

        start_time = time.time()

        while True:
            stop_flag, reason, max_reached_flag = check_stop_condition(
                self.epoch, self.infos, options)
            if stop_flag:
                display_stop_reason(self.epoch, self.infos, options,
                                    self._METHOD_NAME, reason, max_reached_flag)
                break

            self._update(compute_w=compute_w, compute_h=compute_h)

            elapsed_time = time.time() - start_time
            self.epoch += 1

            self._store_info(elapsed_time)
            display_info(self._METHOD_NAME, self.epoch, self.infos, options)

        self._finalize()
