#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This file includes the solver interfaces for PLANTOPT.
"""
import logging
import pyomo.opt as po
from pyomo.solvers.plugins.solvers.persistent_solver import PersistentSolver

from plantopt.common.errors import InfeasibleModel, UnboundedModel, SolverFailure

logger = logging.getLogger('plantopt.common.solver_interface')

## termination conditions which come with a usable solution
optimal_termination_conditions = [
                                  po.TerminationCondition.globallyOptimal,
                                  po.TerminationCondition.locallyOptimal,
                                  po.TerminationCondition.optimal,
                                 ]

infeasible_termination_conditions = [
                                     po.TerminationCondition.infeasible,
                                     po.TerminationCondition.invalidProblem,
                                     po.TerminationCondition.infeasibleOrUnbounded,
                                    ]

unbounded_termination_conditions = [
                                    po.TerminationCondition.unbounded,
                                   ]


def _solver_name(solver):
    ## the legacy wrappers of the appsi solvers carry no name,
    ## but do carry the solver class among their bases
    if hasattr(solver, 'name'):
        return str(solver.name).lower()
    return ' '.join(cls.__name__ for cls in type(solver).__mro__).lower()

def _set_options(solver, mipgap=None, timelimit=None, other_options=None):
    '''
    Create options

    Parameters
    ----------
    solver : pyomo solver
        An instanciated pyomo solver
    mipgap : float (optional)
        Relative mipgap to use for the solve. Default of None
        leaves the solver's own default in place.
    timelimit : float (optional)
        Time limit for the solve. Default of None results in no time
        limit being set
    other_options : dict (optional)
        Other options to pass into the solver. Default is dict().
    '''

    solver_name = _solver_name(solver)

    if 'gurobi' in solver_name:
        if mipgap is not None:
            solver.options.MIPGap = mipgap
        if timelimit is not None:
            solver.options.TimeLimit = timelimit
    elif 'cplex' in solver_name:
        if mipgap is not None:
            solver.options.mip_tolerances_mipgap = mipgap
        if timelimit is not None:
            solver.options.timelimit = timelimit
    elif 'glpk' in solver_name:
        if mipgap is not None:
            solver.options.mipgap = mipgap
        if timelimit is not None:
            solver.options.tmlim = timelimit
    elif 'cbc' in solver_name:
        if mipgap is not None:
            solver.options.ratioGap = mipgap
        if timelimit is not None:
            solver.options.sec = timelimit
    elif 'highs' in solver_name:
        if mipgap is not None:
            solver.options['mip_rel_gap'] = mipgap
        if timelimit is not None:
            solver.options['time_limit'] = timelimit
    elif mipgap is not None or timelimit is not None:
        logger.warning('Do not know how to set mipgap or timelimit for solver {}, ignoring'.format(solver_name))

    if other_options is not None:
        for key, opt in other_options.items():
            solver.options[key] = opt

def _check_termination_condition(results):
    '''
    Raise the appropriate SolveError if the solve did not
    terminate with an optimal solution
    '''
    termination_condition = results.solver.termination_condition

    if termination_condition in optimal_termination_conditions:
        return

    if termination_condition in infeasible_termination_conditions:
        msg = 'Model is infeasible, termination_condition {}'.format(termination_condition)
        logger.error(msg)
        raise InfeasibleModel(msg, termination_condition, results)

    if termination_condition in unbounded_termination_conditions:
        msg = 'Model is unbounded, termination_condition {}'.format(termination_condition)
        logger.error(msg)
        raise UnboundedModel(msg, termination_condition, results)

    msg = 'Problem encountered during solve, termination_condition {}'.format(termination_condition)
    logger.error(msg)
    raise SolverFailure(msg, termination_condition, results)

def _solve_model(model,
                 solver,
                 mipgap=None,
                 timelimit = None,
                 solver_tee = True,
                 symbolic_solver_labels = False,
                 solver_options = None,
                 solve_method_options = None,
                 return_solver = False,
                 vars_to_load = None,
                 set_instance = True):
    '''
    Solve a PLANTOPT dispatch model

    Parameters
    ----------
    model : pyomo.environ.ConcreteModel
        A pyomo ConcreteModel object.
    solver : str or pyomo solver
        Either a string specifying a pyomo solver name, or an instanciated pyomo solver
    mipgap : float (optional)
        Relative mipgap to use for the solve. Default of None leaves the
        solver's own default in place.
    timelimit : float (optional)
        Time limit for the solve. Default of None results in no time
        limit being set. Hitting the time limit raises SolverFailure.
    solver_tee : bool (optional)
        Display solver log. Default is True.
    symbolic_solver_labels : bool (optional)
        Use symbolic solver labels. Useful for debugging; default is False.
    solver_options : dict (optional)
        Other options to pass into the solver. Default is dict().
    solve_method_options : dict (optional)
        Other options to pass into the pyomo solve method. Default is dict().
    return_solver : bool (optional)
        Returns the solver object
    vars_to_load : list (optional)
        When supplied, and the solver is persistent, this will just load
        pyomo variables specificed
    set_instance : bool
        When the solver is persistent, this controls whether set_instance
        is called. Default is True

    Returns
    -------
        (model, results) or (model, results, solver)

    Raises
    ------
        InfeasibleModel, UnboundedModel, SolverFailure
    '''

    results = None

    if isinstance(solver, str):
        solver = po.SolverFactory(solver)
    elif not hasattr(solver, 'solve'):
        raise TypeError('solver must be string or an instanciated pyomo solver')

    _set_options(solver, mipgap, timelimit, solver_options)

    if solve_method_options is None:
        solve_method_options = dict()

    logger.debug('Solving model {} with solver {}'.format(model.name, _solver_name(solver)))

    try:
        if isinstance(solver, PersistentSolver):
            if set_instance:
                solver.set_instance(model, symbolic_solver_labels=symbolic_solver_labels)
            results = solver.solve(model, tee=solver_tee, load_solutions=False, save_results=False, **solve_method_options)
        else:
            results = solver.solve(model, tee=solver_tee, \
                                  symbolic_solver_labels=symbolic_solver_labels, load_solutions=False,
                                  **solve_method_options)
    except (RuntimeError, ValueError, OSError) as e:
        msg = 'Solver {} failed on model {}: {}'.format(_solver_name(solver), model.name, e)
        logger.error(msg)
        raise SolverFailure(msg) from e

    _check_termination_condition(results)

    if isinstance(solver, PersistentSolver):
        solver.load_vars(vars_to_load)
        if vars_to_load is None:
            if hasattr(model, "dual"):
                solver.load_duals()
            if hasattr(model, "slack"):
                solver.load_slacks()
    else:
        model.solutions.load_from(results)

    logger.debug('Solve of model {} terminated with {}'.format(model.name, results.solver.termination_condition))

    if return_solver:
        return model, results, solver
    return model, results
