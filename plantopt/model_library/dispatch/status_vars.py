#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## functions for adding the basic status varibles
from pyomo.environ import *

from .dispatch_utils import add_model_attr
component_name = 'status_vars'

def _is_relaxed(model):
    if hasattr(model, 'relax_binaries') and model.relax_binaries:
        return True
    else:
        return False

def _add_unit_on_vars(model, relaxed=False):
    # indicator variables for each generator, at each time period.
    if relaxed:
        model.UnitOn = Var(model.ThermalGenerators, model.TimePeriods, within=UnitInterval)
    else:
        model.UnitOn = Var(model.ThermalGenerators, model.TimePeriods, within=Binary)

def _add_unit_start_vars(model, relaxed=False):
    # unit start
    if relaxed:
        model.UnitStart=Var(model.ThermalGenerators,model.TimePeriods, within=UnitInterval)
    else:
        model.UnitStart=Var(model.ThermalGenerators,model.TimePeriods, within=Binary)

def _add_unit_stop_vars(model, relaxed=False):

    if relaxed:
        model.UnitStop=Var(model.ThermalGenerators,model.TimePeriods, within=UnitInterval)

    else:
        model.UnitStop=Var(model.ThermalGenerators,model.TimePeriods, within=Binary)


@add_model_attr(component_name, requires = {'data_loader': None} )
def online_capacity_vars(model):
    '''
    The continuous commitment status: the capacity of each thermal
    generator that is online (warm) in each time period. The output
    limits tie it to the installed capacity and to the power generated.
    '''
    model.OnlineCapacity = Var(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals)

@add_model_attr(component_name, requires = {'data_loader': None} )
def garver_3bin_vars(model):
    '''
    This add the common 3-binary variables per generator per time period.
    One for start, one for stop, and one for on, as originally proposed in

    L. L. Garver. Power generation scheduling by integer programming-development
    of theory. Power Apparatus and Systems, Part III. Transactions of the
    American Institute of Electrical Engineers, 81(3): 730–734, April 1962. ISSN
    0097-2460.

    The online capacity of a committed unit is its full rating, so
    OnlineCapacity is the expression MaximumPowerOutput*UnitOn.
    '''

    relaxed = _is_relaxed(model)
    _add_unit_on_vars(model, relaxed)
    _add_unit_start_vars(model, relaxed)
    _add_unit_stop_vars(model, relaxed)

    def online_capacity_expr_rule(m, g, t):
        return m.MaximumPowerOutput[g]*m.UnitOn[g,t]
    model.OnlineCapacity = Expression(model.ThermalGenerators, model.TimePeriods, rule=online_capacity_expr_rule)

    return
