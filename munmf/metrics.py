# License: BSD 3 Clause
"""
Cost computation, per-epoch log records, stop conditions and progress
display shared by the MU solvers.
"""
import logging

import numpy as np
from scipy.special import xlogy

__all__ = ["calc_cost", "store_nmf_info", "check_stop_condition",
           "display_info", "display_stop_reason"]

_INFO_KEYS = ('epoch', 'cost', 'optgap', 'time', 'grad_calc_count')


def calc_cost(V, W, H, options):
    """ Returns the divergence D(V||WH) selected by options['metric_type'].

    'euc'    : 0.5 * ||V - WH||_F^2
    'kl-div' : sum(V log(V/WH) - V + WH), WH floored at options['myeps']
    """
    metric_type = options['metric_type']
    if metric_type == 'euc':
        return 0.5 * np.sum((V - np.dot(W, H))**2)
    elif metric_type == 'kl-div':
        R = np.maximum(np.dot(W, H), options['myeps'])
        return np.sum(xlogy(V, V / R) - V + R)
    raise ValueError("unknown metric_type %r" % (metric_type,))


def store_nmf_info(V, W, H, options, infos, epoch, grad_calc_count, elapsed_time):
    """ Appends one log record and returns (infos, cost, optgap).

    infos is a dict of lists; pass None to start a new log.
    """
    cost = calc_cost(V, W, H, options)
    optgap = abs(cost - options['f_opt'])

    if infos is None:
        infos = dict((key, []) for key in _INFO_KEYS)

    infos['epoch'].append(epoch)
    infos['cost'].append(cost)
    infos['optgap'].append(optgap)
    infos['time'].append(elapsed_time)
    infos['grad_calc_count'].append(grad_calc_count)

    return infos, cost, optgap


def check_stop_condition(epoch, infos, options):
    """ Returns (stop_flag, reason, max_reached_flag).
    """
    if infos['optgap'][-1] < options['tol_optgap']:
        return True, 'Optimality gap tolerance reached', False

    tol_cost_change = options.get('tol_cost_change', 0)
    if tol_cost_change > 0 and len(infos['cost']) > 1:
        if abs(infos['cost'][-1] - infos['cost'][-2]) < tol_cost_change:
            return True, 'Cost change tolerance reached', False

    if epoch >= options['max_epoch']:
        return True, 'Max epoch reached', True

    if infos['time'][-1] >= options['max_time']:
        return True, 'Max time reached', False

    return False, None, False


def _format_record(infos, idx):
    line = 'cost = %.16e' % infos['cost'][idx]
    if 'cost_reg' in infos:
        line += ', cost-reg = %.16e' % infos['cost_reg'][idx]
    return line + ', optgap = %.4e' % infos['optgap'][idx]


def display_info(method_name, epoch, infos, options):
    """ Logs the latest record every options['verbose_disp_epoch'] epochs
    when options['verbose'] > 1.
    """
    if options['verbose'] > 1 and epoch % options['verbose_disp_epoch'] == 0:
        logging.getLogger("munmf").info('%s: Epoch = %04d, %s' % (
            method_name, epoch, _format_record(infos, -1)))


def display_stop_reason(epoch, infos, options, method_name, reason, max_reached_flag):
    if options['verbose'] > 0:
        logger = logging.getLogger("munmf")
        if max_reached_flag:
            logger.info('# %s: %s (not converged)' % (method_name, reason))
        else:
            logger.info('# %s: %s' % (method_name, reason))
        logger.info('# %s: Epoch = %03d, %s, time = %.4e' % (
            method_name, epoch, _format_record(infos, -1), infos['time'][-1]))
