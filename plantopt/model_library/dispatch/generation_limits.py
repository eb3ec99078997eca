#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## for generation limit constraints
from pyomo.environ import *

from .dispatch_utils import add_model_attr, binary_status_vars, continuous_status_vars

component_name = 'generation_limits'

def _add_online_capacity_limit(model):
    ## the online capacity can never exceed the installed capacity
    def online_capacity_limit_rule(m, g, t):
        return m.OnlineCapacity[g,t] <= m.InstalledThermalCapacity[g]
    model.EnforceOnlineCapacityLimit = Constraint(model.ThermalGenerators, model.TimePeriods, rule=online_capacity_limit_rule)

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': continuous_status_vars,
                                            'power_vars': None,
                                            'capacity_expansion': None,
                                            })
def partial_load_generation_limits(model):
    '''
    Output of a thermal generator lies between PartialLoadMin and 100% of
    its online capacity, which in turn is bounded by the installed capacity.
    A cold-start generator has no online capacity in the first time period.
    '''

    _add_online_capacity_limit(model)

    def enforce_max_output_rule(m, g, t):
        return m.PowerGenerated[g,t] <= m.OnlineCapacity[g,t]
    model.EnforceGeneratorOutputLimitsPartB = Constraint(model.ThermalGenerators, model.TimePeriods, rule=enforce_max_output_rule)

    def enforce_min_output_rule(m, g, t):
        return m.PartialLoadMin[g]*m.OnlineCapacity[g,t] <= m.PowerGenerated[g,t]
    model.EnforceGeneratorOutputLimitsPartA = Constraint(model.ThermalGenerators, model.TimePeriods, rule=enforce_min_output_rule)

    def cold_start_rule(m, g):
        if not value(m.ColdStart[g]):
            return Constraint.Skip
        return m.OnlineCapacity[g, value(m.InitialTime)] == 0.
    model.EnforceColdStart = Constraint(model.ThermalGenerators, rule=cold_start_rule)

    return

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': binary_status_vars,
                                            'power_vars': None,
                                            'capacity_expansion': None,
                                            })
def commitment_generation_limits(model):
    '''
    Output of a committed generator lies between MinimumPowerOutput and
    MaximumPowerOutput, and is zero when it is off. A generator must have
    its full rating installed in order to be committed.
    '''

    _add_online_capacity_limit(model)

    def enforce_max_output_rule(m, g, t):
        return m.PowerGenerated[g,t] <= m.MaximumPowerOutput[g]*m.UnitOn[g,t]
    model.EnforceGeneratorOutputLimitsPartB = Constraint(model.ThermalGenerators, model.TimePeriods, rule=enforce_max_output_rule)

    def enforce_min_output_rule(m, g, t):
        return m.MinimumPowerOutput[g]*m.UnitOn[g,t] <= m.PowerGenerated[g,t]
    model.EnforceGeneratorOutputLimitsPartA = Constraint(model.ThermalGenerators, model.TimePeriods, rule=enforce_min_output_rule)

    return
