import numpy as np
import pytest

from munmf import calc_cost, check_stop_condition, get_nmf_default_options, store_nmf_info


def _options(**kwargs):
    options = get_nmf_default_options()
    options.update(kwargs)
    return options


def _infos(costs, optgap=np.inf, elapsed=0.0):
    return {
        'epoch': list(range(len(costs))),
        'cost': list(costs),
        'optgap': [optgap] * len(costs),
        'time': [elapsed] * len(costs),
        'grad_calc_count': [0] * len(costs),
    }


def test_euclidean_cost():
    V = np.array([[1.0, 2.0], [3.0, 4.0]])
    W = np.array([[1.0], [1.0]])
    H = np.array([[1.0, 2.0]])

    # residual [[0, 0], [2, 2]]
    assert calc_cost(V, W, H, _options(metric_type='euc')) == pytest.approx(4.0)


def test_kl_cost_of_exact_factorization_is_zero():
    W = np.array([[1.0, 0.5], [0.2, 2.0], [1.0, 1.0]])
    H = np.array([[1.0, 3.0, 0.5], [2.0, 0.1, 1.0]])
    V = np.dot(W, H)

    assert abs(calc_cost(V, W, H, _options(metric_type='kl-div'))) < 1e-12


def test_kl_cost_treats_zero_entries():
    V = np.array([[0.0, 1.0]])
    W = np.array([[1.0]])
    H = np.array([[1.0, 1.0]])

    assert calc_cost(V, W, H, _options(metric_type='kl-div')) == pytest.approx(1.0)


def test_unknown_metric_raises():
    with pytest.raises(ValueError):
        calc_cost(np.ones((2, 2)), np.ones((2, 1)), np.ones((1, 2)),
                  _options(metric_type='itakura-saito'))


def test_store_nmf_info_starts_and_extends_log():
    V = np.array([[1.0, 2.0], [3.0, 4.0]])
    W = np.array([[1.0], [1.0]])
    H = np.array([[1.0, 2.0]])
    options = _options(f_opt=1.0)

    infos, cost, optgap = store_nmf_info(V, W, H, options, None, 0, 0, 0.0)
    assert cost == pytest.approx(4.0)
    assert optgap == pytest.approx(3.0)

    infos, _, _ = store_nmf_info(V, W, H, options, infos, 1, 4, 0.5)
    assert infos['epoch'] == [0, 1]
    assert infos['grad_calc_count'] == [0, 4]
    assert infos['time'] == [0.0, 0.5]
    assert len(infos['cost']) == len(infos['optgap']) == 2


def test_optgap_is_infinite_without_known_optimum():
    V = np.ones((2, 2))
    infos, _, optgap = store_nmf_info(V, np.ones((2, 1)), np.ones((1, 2)),
                                      _options(), None, 0, 0, 0.0)
    assert np.isinf(optgap)


def test_stop_on_max_epoch():
    stop, reason, max_reached = check_stop_condition(5, _infos([3.0] * 6), _options(max_epoch=5))
    assert stop
    assert reason == 'Max epoch reached'
    assert max_reached


def test_continue_below_max_epoch():
    stop, reason, max_reached = check_stop_condition(4, _infos([3.0] * 5), _options(max_epoch=5))
    assert not stop
    assert reason is None
    assert not max_reached


def test_stop_on_optgap():
    stop, reason, max_reached = check_stop_condition(1, _infos([3.0, 2.0], optgap=1e-14),
                                                     _options())
    assert stop
    assert reason == 'Optimality gap tolerance reached'
    assert not max_reached


def test_stop_on_max_time():
    stop, reason, _ = check_stop_condition(1, _infos([3.0, 2.0], elapsed=2.0),
                                           _options(max_time=1.0))
    assert stop
    assert reason == 'Max time reached'


def test_stop_on_cost_change():
    options = _options(tol_cost_change=1e-3)
    stop, reason, _ = check_stop_condition(2, _infos([3.0, 2.0, 1.9995]), options)
    assert stop
    assert reason == 'Cost change tolerance reached'

    stop, _, _ = check_stop_condition(2, _infos([3.0, 2.0, 1.5]), options)
    assert not stop
