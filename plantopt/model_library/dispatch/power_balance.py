#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## system variables and constraints
from pyomo.environ import *

from .dispatch_utils import add_model_attr

component_name = 'power_balance'

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'power_vars': None,
                                            'capacity_expansion': None,
                                            })
def demand_balance(model):
    '''
    Supply (renewable output plus thermal output, less exports) must cover
    the demand in every time period. Demand may be over-supplied; surplus
    energy that is not exported is curtailed at no cost.
    '''

    def export_bounds_rule(m, e, t):
        return (0, m.ExportLimit[e])
    model.PowerExported = Var(model.Exports, model.TimePeriods, within=NonNegativeReals, bounds=export_bounds_rule)

    def total_supply_rule(m, t):
        return sum(m.RenewableOutput[g,t] for g in m.RenewableGenerators) \
             + sum(m.PowerGenerated[g,t] for g in m.ThermalGenerators) \
             - sum(m.PowerExported[e,t] for e in m.Exports)
    model.NetSupply = Expression(model.TimePeriods, rule=total_supply_rule)

    def demand_balance_rule(m, t):
        return m.NetSupply[t] >= m.Demand[t]
    model.DemandBalance = Constraint(model.TimePeriods, rule=demand_balance_rule)

    return
