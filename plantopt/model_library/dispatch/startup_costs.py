#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## startup and shutdown accounting
from pyomo.environ import *

from .dispatch_utils import add_model_attr, binary_status_vars, continuous_status_vars

component_name = 'startup_costs'

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': continuous_status_vars,
                                            })
def online_capacity_startup_costs(model):
    '''
    Startup costs are charged on the capacity brought online. StartupCapacity
    is only a lower bound on the increase in online capacity between two time
    periods; since it carries a non-negative cost it is tight at an optimum.
    Before the first time period the online capacity is InitialOnlineCapacity.
    '''

    model.StartupCapacity = Var(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals)

    def startup_capacity_rule(m, g, t):
        t_prev = m.timeline.predecessor(t)
        if t_prev is None:
            return m.StartupCapacity[g,t] >= m.OnlineCapacity[g,t] - m.InitialOnlineCapacity[g]
        return m.StartupCapacity[g,t] >= m.OnlineCapacity[g,t] - m.OnlineCapacity[g,t_prev]
    model.ComputeStartupCapacity = Constraint(model.ThermalGenerators, model.TimePeriods, rule=startup_capacity_rule)

    def compute_startup_cost_rule(m, g, t):
        return m.StartupPrice[g]*m.StartupCapacity[g,t]
    model.StartupCost = Expression(model.ThermalGenerators, model.TimePeriods, rule=compute_startup_cost_rule)

    return

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': binary_status_vars,
                                            })
def garver_startup_costs(model):
    '''
    The logical constraints of the 3-binary formulation,

        UnitStart[g,t] - UnitStop[g,t] == UnitOn[g,t] - UnitOn[g,t-1]

    with UnitOnT0 before the first time period, together with
    UnitStart[g,t] + UnitStop[g,t] <= 1, so that the start and stop
    variables count events exactly even when their prices are zero.
    Each start costs StartupPrice and each stop costs ShutdownPrice.
    '''

    def logical_rule(m, g, t):
        t_prev = m.timeline.predecessor(t)
        if t_prev is None:
            unit_on_prev = m.UnitOnT0[g]
        else:
            unit_on_prev = m.UnitOn[g,t_prev]
        return m.UnitStart[g,t] - m.UnitStop[g,t] == m.UnitOn[g,t] - unit_on_prev
    model.Logical = Constraint(model.ThermalGenerators, model.TimePeriods, rule=logical_rule)

    def start_stop_exclusive_rule(m, g, t):
        return m.UnitStart[g,t] + m.UnitStop[g,t] <= 1
    model.StartStopExclusive = Constraint(model.ThermalGenerators, model.TimePeriods, rule=start_stop_exclusive_rule)

    def compute_startup_cost_rule(m, g, t):
        return m.StartupPrice[g]*m.UnitStart[g,t]
    model.StartupCost = Expression(model.ThermalGenerators, model.TimePeriods, rule=compute_startup_cost_rule)

    def compute_shutdown_cost_rule(m, g, t):
        return m.ShutdownPrice[g]*m.UnitStop[g,t]
    model.ShutdownCost = Expression(model.ThermalGenerators, model.TimePeriods, rule=compute_shutdown_cost_rule)

    return
