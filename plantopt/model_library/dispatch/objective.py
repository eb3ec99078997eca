#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for the cost ledger and objective
from pyomo.environ import *

from .dispatch_utils import add_model_attr, is_binary_commitment
component_name = 'objective'

## cost buckets of the ledger, in reporting order
continuous_cost_components = ['renewable_investment', 'plant_investment', 'startup', 'fuel',]
binary_cost_components = continuous_cost_components + ['fixed', 'shutdown',]

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': None,
                                            'power_vars': None,
                                            'capacity_expansion': None,
                                            'generation_limits': None,
                                            'fuel_consumption': None,
                                            'startup_costs': None,
                                            'power_balance': None,
                                            })
def basic_objective(model):
    '''
    adds the cost ledger and the objective to the model. The objective is
    the sum of all cost components less the export revenue.
    '''

    binary_commitment = is_binary_commitment(model)

    if binary_commitment:
        def compute_no_load_cost_rule(m,g,t):
            return m.FixedOperatingCost[g]*m.UnitOn[g,t]*m.TimePeriodLengthHours
        model.NoLoadCost = Expression(model.ThermalGenerators, model.TimePeriods, rule=compute_no_load_cost_rule)
        model.CostComponents = Set(initialize=binary_cost_components, ordered=True)
    else:
        model.CostComponents = Set(initialize=continuous_cost_components, ordered=True)

    def component_cost_rule(m, c):
        if c == 'renewable_investment':
            return sum(m.RenewableInvestment[g] for g in m.RenewableGenerators)
        if c == 'plant_investment':
            return sum(m.ThermalInvestment[g] for g in m.ThermalGenerators)
        if c == 'startup':
            return sum(m.StartupCost[g,t] for g in m.ThermalGenerators for t in m.TimePeriods)
        if c == 'fuel':
            return sum(m.FuelCost[g,t] for g in m.ThermalGenerators for t in m.TimePeriods)
        if c == 'fixed':
            return sum(m.NoLoadCost[g,t] for g in m.ThermalGenerators for t in m.TimePeriods)
        if c == 'shutdown':
            return sum(m.ShutdownCost[g,t] for g in m.ThermalGenerators for t in m.TimePeriods)
        raise Exception("Unrecognized cost component {}".format(c))
    model.ComponentCost = Expression(model.CostComponents, rule=component_cost_rule)

    def export_revenue_rule(m):
        return sum(m.ExportPrice[e]*m.PowerExported[e,t]*m.TimePeriodLengthHours for e in m.Exports for t in m.TimePeriods)
    model.ExportRevenue = Expression(rule=export_revenue_rule)

    #
    # Objectives
    #

    def total_cost_objective_rule(m):
       return sum(m.ComponentCost[c] for c in m.CostComponents) - m.ExportRevenue

    model.TotalCostObjective = Objective(rule=total_cost_objective_rule, sense=minimize)

    return
