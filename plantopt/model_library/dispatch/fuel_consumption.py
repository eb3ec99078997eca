#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## fuel consumption with partial-load efficiency
from pyomo.environ import *

from plantopt.common.errors import ConfigurationError
from .dispatch_utils import add_model_attr

import logging
logger = logging.getLogger('plantopt.model_library.dispatch.fuel_consumption')

component_name = 'fuel_consumption'

def partial_load_fuel_coefficients(efficiency_min, efficiency_max, partial_load_min):
    '''
    Coefficients (a, b) of the affine fuel relation

        FuelConsumed = a * OnlineCapacity + b * PowerGenerated

    chosen so that the realized efficiency PowerGenerated/FuelConsumed equals
    efficiency_min at minimum load (PowerGenerated = partial_load_min*OnlineCapacity)
    and efficiency_max at full load (PowerGenerated = OnlineCapacity). Solving
    the two anchor conditions gives

        a = (efficiency_max - efficiency_min) * partial_load_min / D
        b = (efficiency_min - partial_load_min * efficiency_max) / D

    with D = (1 - partial_load_min) * efficiency_min * efficiency_max.
    If efficiency_min == efficiency_max this degenerates to constant
    efficiency, a = 0 and b = 1/efficiency_max, which is also returned
    when partial_load_min == 1.

    Parameters
    ----------
    efficiency_min : float
        Efficiency at minimum load, in (0,1]
    efficiency_max : float
        Efficiency at full load, in (0,1], at least efficiency_min
    partial_load_min : float
        Minimum output as a fraction of online capacity, in [0,1)

    Returns
    -------
        tuple : (a, b)

    Raises
    ------
        ConfigurationError
    '''
    if not (0. < efficiency_min <= 1.) or not (0. < efficiency_max <= 1.):
        raise ConfigurationError("Efficiencies must be in (0,1], found efficiency_min={}, efficiency_max={}".format(efficiency_min, efficiency_max))
    if efficiency_min > efficiency_max:
        raise ConfigurationError("efficiency_min={} is greater than efficiency_max={}; "
                                 "the partial-load interpolation would not be monotonic".format(efficiency_min, efficiency_max))
    if partial_load_min < 0.:
        raise ConfigurationError("partial_load_min must be non-negative, found {}".format(partial_load_min))

    if efficiency_min == efficiency_max:
        return 0., 1./efficiency_max

    if partial_load_min >= 1.:
        raise ConfigurationError("partial_load_min must be less than 1 when efficiency_min < efficiency_max, found {}".format(partial_load_min))

    denominator = (1. - partial_load_min) * efficiency_min * efficiency_max
    online_coef = (efficiency_max - efficiency_min) * partial_load_min / denominator
    output_coef = (efficiency_min - partial_load_min * efficiency_max) / denominator
    return online_coef, output_coef

def realized_efficiency(online_capacity, power_generated, efficiency_min, efficiency_max, partial_load_min):
    '''
    The efficiency PowerGenerated/FuelConsumed implied by the partial-load
    relation, or None if no fuel is consumed
    '''
    a, b = partial_load_fuel_coefficients(efficiency_min, efficiency_max, partial_load_min)
    fuel = a*online_capacity + b*power_generated
    if fuel <= 0.:
        return None
    return power_generated / fuel

@add_model_attr(component_name, requires = {'data_loader': None,
                                            'status_vars': None,
                                            'power_vars': None,
                                            })
def partial_load_fuel_consumption(model):
    '''
    Fuel consumption as an affine function of online capacity and output,
    reproducing efficiency_min at minimum load and efficiency_max at full load.
    For the unit commitment formulation, OnlineCapacity is the expression
    MaximumPowerOutput*UnitOn, and PartialLoadMin is MinimumPowerOutput/MaximumPowerOutput.
    '''

    def fuel_online_coefficient_rule(m, g):
        a, _ = partial_load_fuel_coefficients(value(m.EfficiencyMin[g]), value(m.EfficiencyMax[g]), value(m.PartialLoadMin[g]))
        return a
    model.FuelOnlineCoefficient = Param(model.ThermalGenerators, within=Reals, initialize=fuel_online_coefficient_rule)

    def fuel_output_coefficient_rule(m, g):
        _, b = partial_load_fuel_coefficients(value(m.EfficiencyMin[g]), value(m.EfficiencyMax[g]), value(m.PartialLoadMin[g]))
        if b < 0.:
            logger.warning("WARNING: Generator {} has a negative marginal fuel consumption {}; "
                           "it will run at full online capacity whenever it is online".format(g, b))
        return b
    model.FuelOutputCoefficient = Param(model.ThermalGenerators, within=Reals, initialize=fuel_output_coefficient_rule)

    model.FuelConsumed = Var(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals)

    def compute_fuel_consumed_rule(m, g, t):
        return m.FuelConsumed[g,t] == m.FuelOnlineCoefficient[g]*m.OnlineCapacity[g,t] \
                                    + m.FuelOutputCoefficient[g]*m.PowerGenerated[g,t]
    model.ComputeFuelConsumed = Constraint(model.ThermalGenerators, model.TimePeriods, rule=compute_fuel_consumed_rule)

    def fuel_cost_rule(m, g, t):
        return m.FuelPrice[g]*m.FuelConsumed[g,t]*m.TimePeriodLengthHours
    model.FuelCost = Expression(model.ThermalGenerators, model.TimePeriods, rule=fuel_cost_rule)
