#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
dispatch model tester
'''
import os
import math
import logging

import pytest
from pyomo.environ import value

from plantopt.models.dispatch import *
from plantopt.data.model_data import ModelData
from plantopt.common.errors import ConfigurationError
from plantopt.model_library.dispatch.fuel_consumption import partial_load_fuel_coefficients

current_dir = os.path.dirname(os.path.abspath(__file__))
partial_load_case = os.path.join(current_dir, 'dispatch_test_instances', 'partial_load_4.json')
unit_commitment_case = os.path.join(current_dir, 'dispatch_test_instances', 'unit_commitment_4.json')

## for FP comparisons
eps = 1e-6
rel_tol = 1e-6

def _values(att):
    return att['values']

def _demand(md):
    demand = [0.]*len(md.data['system']['time_keys'])
    for _, l_dict in md.elements(element_type='load'):
        for i, v in enumerate(_values(l_dict['p_load'])):
            demand[i] += v
    return demand

def _check_demand_balance(md):
    demand = _demand(md)
    supply = [0.]*len(demand)
    for _, g_dict in md.elements(element_type='generator'):
        for i, v in enumerate(_values(g_dict['pg'])):
            supply[i] += v
    for _, e_dict in md.elements(element_type='export'):
        for i, v in enumerate(_values(e_dict['p_export'])):
            supply[i] -= v
    for d, s, c in zip(demand, supply, _values(md.data['system']['curtailment'])):
        assert d <= s + eps
        ## the surplus is reported as curtailment
        assert abs(max(0., s - d) - c) <= eps

def _check_cost_ledger(md):
    system = md.data['system']
    for c, cost in system['costs'].items():
        assert cost >= -eps
    assert math.isclose(sum(system['costs'].values()) - system['export_revenue'],
                        system['total_cost'], rel_tol=rel_tol, abs_tol=eps)

def _check_fuel(g_dict, partial_load_min):
    a, b = partial_load_fuel_coefficients(g_dict['efficiency_min'], g_dict['efficiency_max'], partial_load_min)
    for online, pg, fuel in zip(_values(g_dict['online_capacity']), _values(g_dict['pg']), _values(g_dict['fuel_input'])):
        assert math.isclose(fuel, a*online + b*pg, rel_tol=rel_tol, abs_tol=eps)

@pytest.mark.solver
class TestPartialLoad(object):

    def _solve(self, solver, md=None):
        if md is None:
            md = ModelData.read(partial_load_case)
        return solve_dispatch(md, solver, solver_tee=False)

    def test_demand_balance(self, solver):
        md_results = self._solve(solver)
        _check_demand_balance(md_results)
        _check_cost_ledger(md_results)

    def test_output_bounds(self, solver):
        md_results = self._solve(solver)
        for g, g_dict in md_results.elements(element_type='generator', generator_type='thermal'):
            installed = g_dict['installed_capacity']
            for online, pg in zip(_values(g_dict['online_capacity']), _values(g_dict['pg'])):
                assert g_dict['partial_load_min']*online - eps <= pg <= online + eps
                assert online <= installed + eps
            _check_fuel(g_dict, g_dict['partial_load_min'])

    def test_cold_start(self, solver):
        md_results = self._solve(solver)
        for g, g_dict in md_results.elements(element_type='generator', generator_type='thermal'):
            assert abs(_values(g_dict['online_capacity'])[0]) <= eps
            assert abs(_values(g_dict['pg'])[0]) <= eps

    def test_startup_tightness(self, solver):
        md_results = self._solve(solver)
        for g, g_dict in md_results.elements(element_type='generator', generator_type='thermal'):
            online = _values(g_dict['online_capacity'])
            startup = _values(g_dict['startup_capacity'])
            previous = [0.] + online[:-1]
            for s, o, p in zip(startup, online, previous):
                assert math.isclose(s, max(0., o - p), abs_tol=eps)

    def test_capacity_limits(self, solver):
        md_results = self._solve(solver)
        gens = dict(md_results.elements(element_type='generator'))
        assert gens['PV']['installed_capacity'] <= 25.0 + eps
        assert gens['Oil']['installed_capacity'] <= 3.0 + eps

    def test_marginal_price(self, solver):
        md_results = self._solve(solver)
        marginal_price = _values(md_results.data['system']['marginal_price'])
        assert len(marginal_price) == 4
        assert all(math.isfinite(p) for p in marginal_price)

    def test_input_unchanged(self, solver):
        md = ModelData.read(partial_load_case)
        md_clone = md.clone()
        self._solve(solver, md)
        assert md.data == md_clone.data

    def test_return_model(self, solver):
        md = ModelData.read(partial_load_case)
        md_results, m, results = solve_dispatch(md, solver, solver_tee=False, return_model=True, return_results=True)
        assert math.isclose(value(m.TotalCostObjective), md_results.data['system']['total_cost'], rel_tol=rel_tol)
        assert m.status_vars == 'online_capacity_vars'

    def test_warm_start(self, solver):
        ## without a cold start, startups are measured from the given online capacity
        md = ModelData.read(partial_load_case)
        md.data['elements']['generator']['Gas'].update({'cold_start': False, 'initial_online_capacity': 20.0})
        md_results = self._solve(solver, md)
        gas = md_results.data['elements']['generator']['Gas']
        previous = [20.] + _values(gas['online_capacity'])[:-1]
        for s, o, p in zip(_values(gas['startup_capacity']), _values(gas['online_capacity']), previous):
            assert math.isclose(s, max(0., o - p), abs_tol=eps)

@pytest.mark.solver
class TestUnitCommitment(object):

    def _solve(self, solver, md=None, relaxed=False):
        if md is None:
            md = ModelData.read(unit_commitment_case)
        return solve_dispatch(md, solver, solver_tee=False, mipgap=0.0,
                              dispatch_model_generator=create_unit_commitment_model,
                              relaxed=relaxed)

    def test_demand_balance(self, solver):
        md_results = self._solve(solver)
        _check_demand_balance(md_results)
        _check_cost_ledger(md_results)
        assert 'marginal_price' not in md_results.data['system']
        assert set(md_results.data['system']['costs']) == \
                {'renewable_investment', 'plant_investment', 'startup', 'fuel', 'fixed', 'shutdown'}

    def test_commitment_logic(self, solver):
        md_results = self._solve(solver)
        for g, g_dict in md_results.elements(element_type='generator', generator_type='thermal'):
            commitment = _values(g_dict['commitment'])
            previous = [g_dict.get('initial_status', 0)] + commitment[:-1]
            for start, stop, on, prev in zip(_values(g_dict['startup']), _values(g_dict['shutdown']), commitment, previous):
                assert start - stop == on - prev
                assert start + stop <= 1

    def test_output_bounds(self, solver):
        md_results = self._solve(solver)
        for g, g_dict in md_results.elements(element_type='generator', generator_type='thermal'):
            for on, pg in zip(_values(g_dict['commitment']), _values(g_dict['pg'])):
                assert g_dict['p_min']*on - eps <= pg <= g_dict['p_max']*on + eps
            if any(_values(g_dict['commitment'])):
                assert g_dict['installed_capacity'] >= g_dict['p_max'] - eps
            _check_fuel(g_dict, g_dict['p_min']/g_dict['p_max'])

    def test_relaxed(self, solver):
        md_mip = self._solve(solver)
        md_lp = self._solve(solver, relaxed=True)
        assert md_lp.data['system']['total_cost'] <= md_mip.data['system']['total_cost'] + eps
        assert len(_values(md_lp.data['system']['marginal_price'])) == 4

def _scenario_1_data():
    ## a single plant with constant efficiency
    return ModelData({
        'elements': {
            'generator': {
                'G': {
                    'generator_type': 'thermal',
                    'investment_cost': 0.,
                    'fuel_cost': 3.,
                    'startup_cost': 0.,
                    'efficiency_min': 0.5,
                    'efficiency_max': 0.5,
                    'p_min': 0.,
                    'p_max': 2.,
                },
            },
            'load': {
                'L': {'p_load': {'data_type': 'time_series', 'values': [1., 1., 1.]}},
            },
        },
        'system': {'time_keys': ['1', '2', '3']},
        })

@pytest.mark.solver
def test_scenario_1_fuel(solver):
    md_results = solve_dispatch(_scenario_1_data(), solver, solver_tee=False,
                                dispatch_model_generator=create_unit_commitment_model)
    g = md_results.data['elements']['generator']['G']
    for pg, fuel in zip(_values(g['pg']), _values(g['fuel_input'])):
        assert math.isclose(pg, 1., rel_tol=rel_tol)
        assert math.isclose(fuel, pg/0.5, rel_tol=rel_tol)
    assert math.isclose(md_results.data['system']['costs']['fuel'], 2*3.*3, rel_tol=rel_tol)
    assert math.isclose(md_results.data['system']['total_cost'], 18., rel_tol=rel_tol)
    assert _values(g['startup']) == [1, 0, 0]
    assert _values(g['shutdown']) == [0, 0, 0]

@pytest.mark.solver
def test_scenario_2_events(solver):
    md = _scenario_1_data()
    md.data['elements']['generator']['G'].update({'p_min': 0.5, 'fixed_cost': 1., 'startup_cost': 1., 'shutdown_cost': 1.})
    md.data['elements']['load']['L']['p_load']['values'] = [0., 1., 1.]
    md_results = solve_dispatch(md, solver, solver_tee=False,
                                dispatch_model_generator=create_unit_commitment_model)
    g = md_results.data['elements']['generator']['G']
    assert _values(g['commitment']) == [0, 1, 1]
    assert _values(g['startup']) == [0, 1, 0]
    assert _values(g['shutdown']) == [0, 0, 0]
    assert math.isclose(md_results.data['system']['costs']['startup'], 1., rel_tol=rel_tol)
    assert math.isclose(md_results.data['system']['costs']['shutdown'], 0., abs_tol=eps)
    assert math.isclose(md_results.data['system']['costs']['fixed'], 2., rel_tol=rel_tol)

def _scenario_3_data():
    ## renewable energy is cheap and the export price is favourable
    return ModelData({
        'elements': {
            'generator': {
                'PV': {
                    'generator_type': 'renewable',
                    'investment_cost': 1.,
                    'capacity_factor': 1.,
                },
            },
            'load': {
                'L': {'p_load': {'data_type': 'time_series', 'values': [1., 2., 1.]}},
            },
            'export': {
                'Grid': {'price': 10.},
            },
        },
        'system': {'time_keys': ['1', '2', '3']},
        })

@pytest.mark.solver
def test_scenario_3_default_export_cap(solver, caplog):
    with caplog.at_level(logging.WARNING, logger='plantopt'):
        md_results = solve_dispatch(_scenario_3_data(), solver, solver_tee=False)
    assert 'Grid' in caplog.text
    grid = md_results.data['elements']['export']['Grid']
    assert grid['p_max_used'] == 2.
    for p in _values(grid['p_export']):
        assert math.isclose(p, 2., rel_tol=rel_tol)
    pv = md_results.data['elements']['generator']['PV']
    assert math.isclose(pv['installed_capacity'], 4., rel_tol=rel_tol)
    assert math.isclose(md_results.data['system']['export_revenue'], 60., rel_tol=rel_tol)
    assert math.isclose(md_results.data['system']['total_cost'], -56., rel_tol=rel_tol)

@pytest.mark.solver
def test_scenarios(solver):
    scenarios = { 'base' : dict(),
                  'expensive_fuel' : {'generator': {'G': {'fuel_cost': 6.}}},
                  'half_hours' : {'system': {'time_period_length_minutes': 30}},
                }
    md = _scenario_1_data()
    results = solve_dispatch_scenarios(md, scenarios, solver, solver_tee=False,
                                       dispatch_model_generator=create_unit_commitment_model)
    assert set(results) == set(scenarios)
    assert math.isclose(results['base'].data['system']['total_cost'], 18., rel_tol=rel_tol)
    assert math.isclose(results['expensive_fuel'].data['system']['total_cost'], 36., rel_tol=rel_tol)
    assert math.isclose(results['half_hours'].data['system']['total_cost'], 9., rel_tol=rel_tol)
    ## the base case is untouched
    assert md.data['elements']['generator']['G']['fuel_cost'] == 3.

def test_scenario_unknown_element():
    with pytest.raises(ConfigurationError):
        solve_dispatch_scenarios(_scenario_1_data(), {'bad': {'generator': {'H': {'fuel_cost': 1.}}}}, 'glpk')

def test_infeasible_configuration_before_solve():
    md = _scenario_1_data()
    md.data['elements']['load']['L']['p_load']['values'] = [1., 3., 1.]
    with pytest.raises(ConfigurationError):
        solve_dispatch(md, 'glpk', dispatch_model_generator=create_unit_commitment_model)

def test_capacity_limit_below_p_max():
    ## the capacity limit allows no more than 1.5 to be installed,
    ## but committing the plant requires its full rating of 2
    md = _scenario_1_data()
    md.data['elements']['generator']['G']['capacity_limit'] = 1.5
    with pytest.raises(ConfigurationError):
        solve_dispatch(md, 'glpk', dispatch_model_generator=create_unit_commitment_model)

@pytest.mark.solver
def test_capacity_limit_below_p_max_relaxed(solver):
    ## in the relaxation the plant may be committed fractionally
    md = _scenario_1_data()
    md.data['elements']['generator']['G']['capacity_limit'] = 1.5
    md_results = solve_dispatch(md, solver, solver_tee=False, relaxed=True,
                                dispatch_model_generator=create_unit_commitment_model)
    _check_demand_balance(md_results)

def test_solver_found_with_highs(solver):
    ## highspy is an install requirement, so HiGHS must be picked up
    pytest.importorskip('highspy')
    assert solver is not None

def test_model_generators_take_no_extra_arguments():
    with pytest.raises(TypeError):
        create_unit_commitment_model(_scenario_1_data(), foo=1)
    with pytest.raises(TypeError):
        solve_dispatch(_scenario_1_data(), 'glpk', foo=1)
