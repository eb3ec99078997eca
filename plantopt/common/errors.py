#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Exceptions raised while building and solving PLANTOPT models.

ConfigurationError is raised before any model component is built.
The SolveError family is raised by the solver interface after a
solve terminates without an optimal solution; no solution is loaded
into the model in that case.
"""


class PlantoptError(Exception):
    pass


class ConfigurationError(PlantoptError, ValueError):
    '''
    Malformed or inconsistent static parameters, e.g., efficiency_min
    greater than efficiency_max or a time series whose length does not
    match the time horizon.
    '''
    pass


class SolveError(PlantoptError):
    '''
    Base class for unsuccessful solves

    Parameters
    ----------
    msg : str
        The error message
    termination_condition : pyomo.opt.TerminationCondition (optional)
        The termination condition reported by the solver
    results : pyomo.opt.SolverResults (optional)
        The results object returned by the solver
    '''
    def __init__(self, msg, termination_condition=None, results=None):
        super().__init__(msg)
        self.termination_condition = termination_condition
        self.results = results


class InfeasibleModel(SolveError):
    pass


class UnboundedModel(SolveError):
    pass


class SolverFailure(SolveError):
    pass
