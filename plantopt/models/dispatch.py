#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
This module provides functions that create and solve the two time-coupled
capacity expansion and dispatch models:

* the partial-load model, where the commitment of each thermal generator is
  the continuous capacity it keeps online, and startups are charged on the
  capacity brought online, and
* the unit commitment model, where each thermal generator is either on or
  off, and startups and shutdowns are discrete events.

Both size the installed capacity of every generator jointly with the
dispatch over the whole horizon.
'''

from plantopt.model_library.dispatch.dispatch_model_generator \
        import DispatchFormulation, generate_model
from plantopt.common.errors import ConfigurationError
from plantopt.common.log import logger

import pyomo.environ as pe

def _get_dispatch_model(model_data, formulation_list, relax_binaries):
    formulation = DispatchFormulation(*formulation_list)
    return generate_model(model_data, formulation, relax_binaries)

def create_partial_load_model(model_data,
                              relaxed=False):
    '''
    Create a new partial-load dispatch model. The model has no binary
    variables: the online capacity of each thermal generator is continuous,
    output is bounded below by partial_load_min times the online capacity,
    and fuel consumption interpolates between efficiency_min at minimum load
    and efficiency_max at full load.

    Parameters
    ----------
    model_data : plantopt.data.ModelData
        A plantopt ModelData object with the appropriate data loaded.
    relaxed : bool (optional)
        Accepted for symmetry with create_unit_commitment_model; this
        model is always continuous.

    Returns
    -------
        pyomo.environ.ConcreteModel partial-load dispatch model

    '''

    formulation_list = [
                        'online_capacity_vars',
                        'thermal_power_vars',
                        'linear_capacity_expansion',
                        'partial_load_generation_limits',
                        'partial_load_fuel_consumption',
                        'online_capacity_startup_costs',
                        'demand_balance',
                        'basic_objective',
                       ]
    return _get_dispatch_model(model_data, formulation_list, False)

def create_unit_commitment_model(model_data,
                                 relaxed=False):
    '''
    Create a new unit commitment dispatch model, with the 3-binary status
    variables of L. L. Garver (1962). A committed generator produces between
    p_min and p_max, pays fixed_cost per hour online, and startup_cost and
    shutdown_cost per event.

    Parameters
    ----------
    model_data : plantopt.data.ModelData
        A plantopt ModelData object with the appropriate data loaded.
    relaxed : bool (optional)
        If True, creates a model with the binary variables relaxed to [0,1].
        Default is False.

    Returns
    -------
        pyomo.environ.ConcreteModel unit commitment model

    '''

    formulation_list = [
                        'garver_3bin_vars',
                        'thermal_power_vars',
                        'linear_capacity_expansion',
                        'commitment_generation_limits',
                        'partial_load_fuel_consumption',
                        'garver_startup_costs',
                        'demand_balance',
                        'basic_objective',
                       ]
    return _get_dispatch_model(model_data, formulation_list, relaxed)

def _time_series_dict(values):
    return {'data_type':'time_series', 'values':values}

def _has_duals(m, relaxed):
    return relaxed or not m.binary_commitment

def _save_dispatch_results(m, relaxed):
    from pyomo.environ import value

    md = m.model_data

    # save results data to ModelData object
    thermal_gens = dict(md.elements(element_type='generator', generator_type='thermal'))
    renewable_gens = dict(md.elements(element_type='generator', generator_type='renewable'))
    exports = dict(md.elements(element_type='export'))

    time_periods = list(m.TimePeriods)

    for g, g_dict in renewable_gens.items():
        g_dict['installed_capacity'] = value(m.InstalledRenewableCapacity[g])
        g_dict['pg'] = _time_series_dict([ value(m.RenewableOutput[g,t]) for t in time_periods ])

    for g, g_dict in thermal_gens.items():
        g_dict['installed_capacity'] = value(m.InstalledThermalCapacity[g])
        g_dict['pg'] = _time_series_dict([ value(m.PowerGenerated[g,t]) for t in time_periods ])
        g_dict['online_capacity'] = _time_series_dict([ value(m.OnlineCapacity[g,t]) for t in time_periods ])
        g_dict['fuel_input'] = _time_series_dict([ value(m.FuelConsumed[g,t]) for t in time_periods ])

        if m.binary_commitment:
            ## round off solver noise on integral solutions
            if relaxed:
                status = lambda var : value(var)
            else:
                status = lambda var : int(round(value(var)))
            g_dict['commitment'] = _time_series_dict([ status(m.UnitOn[g,t]) for t in time_periods ])
            g_dict['startup'] = _time_series_dict([ status(m.UnitStart[g,t]) for t in time_periods ])
            g_dict['shutdown'] = _time_series_dict([ status(m.UnitStop[g,t]) for t in time_periods ])
        else:
            g_dict['startup_capacity'] = _time_series_dict([ value(m.StartupCapacity[g,t]) for t in time_periods ])

    for e, e_dict in exports.items():
        e_dict['p_export'] = _time_series_dict([ value(m.PowerExported[e,t]) for t in time_periods ])
        ## the export cap actually used, which may be the default
        e_dict['p_max_used'] = value(m.ExportLimit[e])

    system = md.data['system']
    system['costs'] = { c : value(m.ComponentCost[c]) for c in m.CostComponents }
    system['export_revenue'] = value(m.ExportRevenue)
    system['total_cost'] = value(m.TotalCostObjective)

    ## supply in excess of demand is curtailed; clip solver noise
    system['curtailment'] = _time_series_dict(
            [ max(0., value(m.NetSupply[t]) - value(m.Demand[t])) for t in time_periods ])

    if _has_duals(m, relaxed):
        ## dual values are cost per unit of power per time period;
        ## dividing by the time period length reports cost per unit of energy
        time_period_length_hours = value(m.TimePeriodLengthHours)
        system['marginal_price'] = _time_series_dict(
                [ m.dual[m.DemandBalance[t]]/time_period_length_hours for t in time_periods ])

    return md

def _solve_dispatch(m, solver, mipgap, timelimit, solver_tee, symbolic_solver_labels, solver_options, solve_method_options):
    from plantopt.common.solver_interface import _solve_model
    return _solve_model(m,solver,mipgap,timelimit,solver_tee,symbolic_solver_labels,solver_options,solve_method_options, return_solver=True)

def solve_dispatch(model_data,
                   solver,
                   mipgap = None,
                   timelimit = None,
                   solver_tee = True,
                   symbolic_solver_labels = False,
                   solver_options = None,
                   solve_method_options = None,
                   dispatch_model_generator = create_partial_load_model,
                   relaxed = False,
                   return_model = False,
                   return_results = False,
                   **kwargs):
    '''
    Create and solve a new dispatch model

    Parameters
    ----------
    model_data : plantopt.data.ModelData
        A plantopt ModelData object with the appropriate data loaded.
        See plantopt.data.model_data for the attributes read.
    solver : str or pyomo.opt.base.solvers.OptSolver
        Either a string specifying a pyomo solver name, or an instanciated pyomo solver
    mipgap : float (optional)
        Mipgap to use for the unit commitment solve; default of None leaves
        the solver's own default in place
    timelimit : float (optional)
        Time limit for the solve. Default of None results in no time
        limit being set. Reaching the time limit raises SolverFailure.
    solver_tee : bool (optional)
        Display solver log. Default is True.
    symbolic_solver_labels : bool (optional)
        Use symbolic solver labels. Useful for debugging; default is False.
    solver_options : dict (optional)
        Other options to pass into the solver. Default is dict().
    solve_method_options : dict (optional)
        Other options to pass into the pyomo solve method. Default is dict().
    dispatch_model_generator : function (optional)
        Function for generating the dispatch model. Default is
        plantopt.models.dispatch.create_partial_load_model
    relaxed : bool (optional)
        If True, creates a relaxed unit commitment model
    return_model : bool (optional)
        If True, returns the pyomo model object
    return_results : bool (optional)
        If True, returns the pyomo results object
    kwargs : dictionary (optional)
        Additional arguments for a custom dispatch_model_generator; the
        model generators in this module take none

    Returns
    -------
        plantopt.data.ModelData : a copy of model_data with the results

    Raises
    ------
        ConfigurationError : if model_data is malformed
        InfeasibleModel, UnboundedModel, SolverFailure : if the solve
            terminates without an optimal solution
    '''

    m = dispatch_model_generator(model_data, relaxed=relaxed, **kwargs)

    if _has_duals(m, relaxed):
        m.dual = pe.Suffix(direction=pe.Suffix.IMPORT)

    m, results, solver = _solve_dispatch(m, solver, mipgap, timelimit, solver_tee, symbolic_solver_labels, solver_options, solve_method_options)

    md = _save_dispatch_results(m, relaxed)

    logger.info('Dispatch model {} solved, total cost {}'.format(m.name, md.data['system']['total_cost']))

    if return_model and return_results:
        return md, m, results
    elif return_model:
        return md, m
    elif return_results:
        return md, results
    return md

def _apply_scenario(model_data, scenario_name, updates):
    md = model_data.clone()
    for element_type, element_updates in updates.items():
        if element_type == 'system':
            md.data['system'].update(element_updates)
            continue
        elements = md.data['elements'].get(element_type, dict())
        for name, attrs in element_updates.items():
            if name not in elements:
                msg = "Scenario {} updates {} {}, which is not in the model data".format(scenario_name, element_type, name)
                logger.error("DATA ERROR: " + msg)
                raise ConfigurationError(msg)
            elements[name].update(attrs)
    return md

def solve_dispatch_scenarios(model_data,
                             scenarios,
                             solver,
                             **kwargs):
    '''
    Solve one dispatch model per scenario. Each scenario is an independent
    build and solve on a copy of model_data with some attributes replaced.

    Parameters
    ----------
    model_data : plantopt.data.ModelData
        The base case.
    scenarios : dict
        Maps each scenario name to its updates, a dictionary of the form
        {<element-type>: {<element-name>: {<attribute>: <value>}}}.
        The element type 'system' maps directly to system attributes,
        {'system': {<attribute>: <value>}}.
    solver : str or pyomo.opt.base.solvers.OptSolver
        Either a string specifying a pyomo solver name, or an instanciated pyomo solver
    kwargs : dictionary (optional)
        Additional arguments for solve_dispatch

    Returns
    -------
        dict : scenario name -> plantopt.data.ModelData with the results
    '''
    if kwargs.get('return_model') or kwargs.get('return_results'):
        raise ValueError("solve_dispatch_scenarios returns only the result ModelData objects")

    results = dict()
    for scenario_name, updates in scenarios.items():
        logger.info('Solving scenario {}'.format(scenario_name))
        md = _apply_scenario(model_data, scenario_name, updates)
        results[scenario_name] = solve_dispatch(md, solver, **kwargs)
    return results

if __name__ == '__main__':
    import os
    from plantopt.data.model_data import ModelData

    current_dir = os.path.dirname(os.path.abspath(__file__))
    filen = os.path.join(current_dir, 'tests', 'dispatch_test_instances', 'partial_load_4.json')
    md = ModelData.read(filen)
    md_results = solve_dispatch(md, "appsi_highs")
