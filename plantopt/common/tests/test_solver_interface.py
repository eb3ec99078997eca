#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
solver interface tester, using a stand-in solver which
reports a fixed termination condition
'''
import pytest
import pyomo.environ as pe
from pyomo.opt import SolverResults, TerminationCondition
from parameterized import parameterized

from plantopt.common.solver_interface import _solve_model, _set_options, _check_termination_condition
from plantopt.common.errors import PlantoptError, SolveError, InfeasibleModel, UnboundedModel, SolverFailure

class _Options(dict):
    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        self[name] = value

class FakeSolver(object):

    def __init__(self, name='fake', termination_condition=TerminationCondition.optimal, exception=None):
        self.name = name
        self.options = _Options()
        self._termination_condition = termination_condition
        self._exception = exception
        self.solve_calls = 0

    def solve(self, model, **kwargs):
        self.solve_calls += 1
        if self._exception is not None:
            raise self._exception
        results = SolverResults()
        results.solver.termination_condition = self._termination_condition
        return results

def _results(termination_condition):
    results = SolverResults()
    results.solver.termination_condition = termination_condition
    return results

def _model():
    m = pe.ConcreteModel()
    m.name = 'FakeDispatch'
    m.x = pe.Var(within=pe.NonNegativeReals)
    m.obj = pe.Objective(expr=m.x)
    return m

@parameterized.expand([
    (TerminationCondition.optimal,),
    (TerminationCondition.globallyOptimal,),
    (TerminationCondition.locallyOptimal,),
    ])
def test_optimal_terminations(termination_condition):
    _check_termination_condition(_results(termination_condition))

@parameterized.expand([
    (TerminationCondition.infeasible, InfeasibleModel),
    (TerminationCondition.infeasibleOrUnbounded, InfeasibleModel),
    (TerminationCondition.invalidProblem, InfeasibleModel),
    (TerminationCondition.unbounded, UnboundedModel),
    (TerminationCondition.maxTimeLimit, SolverFailure),
    (TerminationCondition.maxIterations, SolverFailure),
    (TerminationCondition.error, SolverFailure),
    (TerminationCondition.solverFailure, SolverFailure),
    ])
def test_termination_mapping(termination_condition, exception):
    results = _results(termination_condition)
    with pytest.raises(exception) as excinfo:
        _check_termination_condition(results)
    assert excinfo.value.termination_condition == termination_condition
    assert excinfo.value.results is results
    assert isinstance(excinfo.value, SolveError)
    assert isinstance(excinfo.value, PlantoptError)

def test_solve_model_infeasible():
    solver = FakeSolver(termination_condition=TerminationCondition.infeasible)
    with pytest.raises(InfeasibleModel):
        _solve_model(_model(), solver, solver_tee=False)
    assert solver.solve_calls == 1

def test_solve_model_unbounded():
    solver = FakeSolver(termination_condition=TerminationCondition.unbounded)
    with pytest.raises(UnboundedModel):
        _solve_model(_model(), solver, solver_tee=False)

def test_solve_model_time_limit():
    solver = FakeSolver(termination_condition=TerminationCondition.maxTimeLimit)
    with pytest.raises(SolverFailure):
        _solve_model(_model(), solver, solver_tee=False)

def test_solve_model_solver_error():
    solver = FakeSolver(exception=RuntimeError('solver crashed'))
    with pytest.raises(SolverFailure) as excinfo:
        _solve_model(_model(), solver, solver_tee=False)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert excinfo.value.termination_condition is None

def test_solve_model_bad_solver():
    with pytest.raises(TypeError):
        _solve_model(_model(), object())

def test_set_options_highs():
    solver = FakeSolver(name='appsi_highs')
    _set_options(solver, mipgap=0.01, timelimit=10, other_options={'presolve': 'off'})
    assert solver.options['mip_rel_gap'] == 0.01
    assert solver.options['time_limit'] == 10
    assert solver.options['presolve'] == 'off'

def test_set_options_cbc():
    solver = FakeSolver(name='cbc')
    _set_options(solver, mipgap=0.01, timelimit=10)
    assert solver.options['ratioGap'] == 0.01
    assert solver.options['sec'] == 10

def test_set_options_defaults():
    solver = FakeSolver(name='glpk')
    _set_options(solver)
    assert len(solver.options) == 0

def test_set_options_unknown_solver():
    solver = FakeSolver(name='mystery')
    _set_options(solver, mipgap=0.01)
    assert len(solver.options) == 0
