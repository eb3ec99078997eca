#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
pytest configuration options for test_dispatch.py,
per the pytest examples
'''
import pytest
from pyomo.environ import SolverFactory

## in order of preference; all of these solve MIPs and report LP duals
solver_list = ['appsi_highs', 'highs', 'cbc', 'glpk']

def _find_test_solver():
    for solver in solver_list:
        try:
            if SolverFactory(solver).available(exception_flag=False):
                return solver
        except Exception:
            continue
    return None

test_solver = _find_test_solver()

def pytest_configure(config):
    config.addinivalue_line("markers", "solver: the test needs an LP/MIP solver")

def pytest_collection_modifyitems(config, items):
    if test_solver is None:
        skip_solver = pytest.mark.skip(reason="need one of the solvers {}".format(solver_list))
        for item in items:
            if "solver" in item.keywords:
                item.add_marker(skip_solver)

@pytest.fixture
def solver():
    return test_solver
