#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## first-stage capacity (investment) decisions
from pyomo.environ import *

from .dispatch_utils import add_model_attr

component_name = 'capacity_expansion'

def _capacity_bounds(limits):
    def capacity_bounds_rule(m, g):
        return (0, limits.get(g))
    return capacity_bounds_rule

@add_model_attr(component_name, requires = {'data_loader': None})
def linear_capacity_expansion(model):
    '''
    Installed capacity of each generator, chosen once for the whole horizon
    at a linear investment cost. The optional capacity_limit of a generator
    is an upper bound on its installed capacity.

    Renewable output is not dispatchable: it is the capacity factor times
    the installed capacity in every time period.
    '''

    model.InstalledRenewableCapacity = Var(model.RenewableGenerators, within=NonNegativeReals,
                                           bounds=_capacity_bounds(model._renewable_capacity_limits))
    model.InstalledThermalCapacity = Var(model.ThermalGenerators, within=NonNegativeReals,
                                         bounds=_capacity_bounds(model._thermal_capacity_limits))

    def renewable_output_rule(m, g, t):
        return m.CapacityFactor[g,t]*m.InstalledRenewableCapacity[g]
    model.RenewableOutput = Expression(model.RenewableGenerators, model.TimePeriods, rule=renewable_output_rule)

    def renewable_investment_cost_rule(m, g):
        return m.RenewableInvestmentCost[g]*m.InstalledRenewableCapacity[g]
    model.RenewableInvestment = Expression(model.RenewableGenerators, rule=renewable_investment_cost_rule)

    def thermal_investment_cost_rule(m, g):
        return m.ThermalInvestmentCost[g]*m.InstalledThermalCapacity[g]
    model.ThermalInvestment = Expression(model.ThermalGenerators, rule=thermal_investment_cost_rule)

    return
