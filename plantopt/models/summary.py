#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
Summary statistics of solved dispatch models.

Every function takes the ModelData object returned by
:py:func:`plantopt.models.dispatch.solve_dispatch` and reads only
the result attributes it wrote; no model or solver is needed.
"""

import numpy as np
import pandas as pd

## tolerance for counting a continuous startup as an event
startup_tol = 1e-6

def _values(att):
    return np.asarray(att['values'], dtype=float)

def cost_breakdown(md):
    '''
    The cost of each bucket of the cost ledger, the export revenue,
    and the total cost, as a pandas Series
    '''
    system = md.data['system']
    costs = dict(system['costs'])
    costs['export_revenue'] = -system.get('export_revenue', 0.)
    costs['total'] = system['total_cost']
    return pd.Series(costs, name='cost')

def _curtailment(md):
    system = md.data['system']
    if 'curtailment' in system:
        return _values(system['curtailment'])
    return np.zeros(len(system['time_keys']))

def _available_renewable(md):
    available = np.zeros(len(md.data['system']['time_keys']))
    for _, g_dict in md.elements(element_type='generator', generator_type='renewable'):
        available += _values(g_dict['pg'])
    return available

def delivered_renewable_output(md):
    '''
    Output of each renewable generator net of curtailment, per time period.

    Surplus supply is taken from the renewable generators first, shared
    in proportion to their available output ('pg'), since renewable output
    is free to curtail.

    Returns
    -------
        dict : generator name -> numpy.ndarray
    '''
    available = _available_renewable(md)
    curtailed = np.minimum(_curtailment(md), available)
    delivered = dict()
    for g, g_dict in md.elements(element_type='generator', generator_type='renewable'):
        pg = _values(g_dict['pg'])
        share = np.divide(pg, available, out=np.zeros_like(pg), where=available > 0.)
        delivered[g] = pg - share*curtailed
    return delivered

def curtailment(md):
    '''
    Total energy supplied in excess of demand and exports over the horizon
    '''
    hours = md.data['system'].get('time_period_length_minutes', 60)/60.
    return float(_curtailment(md).sum()*hours)

def renewable_share(md):
    '''
    The fraction of the energy delivered which came from renewable
    generators, or None if nothing was delivered. Curtailed energy
    is not counted as delivered.
    '''
    renewable = sum(pg.sum() for pg in delivered_renewable_output(md).values())
    thermal = sum(_values(g_dict['pg']).sum() for _, g_dict in
                  md.elements(element_type='generator', generator_type='thermal'))
    ## surplus beyond the renewable output was thermal output
    thermal -= np.maximum(_curtailment(md) - _available_renewable(md), 0.).sum()
    total = renewable + thermal
    if total <= 0.:
        return None
    return float(renewable/total)

def realized_efficiency(md):
    '''
    Realized efficiency (output over fuel input) of each thermal generator
    in each time period, None in time periods where it burned no fuel

    Returns
    -------
        dict : generator name -> list
    '''
    efficiencies = dict()
    for g, g_dict in md.elements(element_type='generator', generator_type='thermal'):
        pg = _values(g_dict['pg'])
        fuel = _values(g_dict['fuel_input'])
        efficiencies[g] = [ float(p/f) if f > 0. else None for p, f in zip(pg, fuel) ]
    return efficiencies

def utilization(md):
    '''
    Energy delivered by each generator divided by the energy its installed
    capacity could have generated over the horizon, None if nothing was installed
    '''
    delivered = delivered_renewable_output(md)
    utilizations = dict()
    for g, g_dict in md.elements(element_type='generator'):
        pg = delivered[g] if g in delivered else _values(g_dict['pg'])
        installed = g_dict['installed_capacity']
        if installed <= 0.:
            utilizations[g] = None
            continue
        utilizations[g] = float(pg.mean()/installed)
    return utilizations

def event_counts(md):
    '''
    Number of startups and shutdowns of each thermal generator.

    For the partial-load model a startup is a time period in which some
    capacity was brought online; the capacity brought online over the
    horizon is reported as 'startup_capacity', and shutdowns are not tracked.
    '''
    counts = dict()
    for g, g_dict in md.elements(element_type='generator', generator_type='thermal'):
        if 'startup' in g_dict:
            counts[g] = { 'startups' : int(np.round(_values(g_dict['startup'])).sum()),
                          'shutdowns' : int(np.round(_values(g_dict['shutdown'])).sum()),
                        }
        else:
            startup_capacity = _values(g_dict['startup_capacity'])
            counts[g] = { 'startups' : int((startup_capacity > startup_tol).sum()),
                          'startup_capacity' : float(startup_capacity.sum()),
                        }
    return counts

def dispatch_dataframe(md):
    '''
    The dispatch of every generator and export in each time period, as a
    pandas DataFrame indexed by the time keys, with demand, the
    curtailment and the marginal price (when available) alongside
    '''
    time_keys = md.data['system']['time_keys']
    columns = dict()
    demand = np.zeros(len(time_keys))
    for _, l_dict in md.elements(element_type='load'):
        p_load = l_dict['p_load']
        if isinstance(p_load, dict):
            demand += _values(p_load)
        else:
            demand += p_load
    columns['demand'] = demand
    for g, g_dict in md.elements(element_type='generator'):
        columns[g] = _values(g_dict['pg'])
    for e, e_dict in md.elements(element_type='export'):
        columns[e] = -_values(e_dict['p_export'])
    if 'curtailment' in md.data['system']:
        columns['curtailment'] = -_curtailment(md)
    if 'marginal_price' in md.data['system']:
        columns['marginal_price'] = _values(md.data['system']['marginal_price'])
    df = pd.DataFrame(columns, index=pd.Index(time_keys, name='time'))
    return df

def summarize_dispatch(md):
    '''
    All of the summary statistics of a solved dispatch model

    Returns
    -------
        dict
    '''
    return { 'costs' : cost_breakdown(md).to_dict(),
             'renewable_share' : renewable_share(md),
             'realized_efficiency' : realized_efficiency(md),
             'utilization' : utilization(md),
             'curtailment' : curtailment(md),
             'event_counts' : event_counts(md),
           }
