#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## file for power variables
from pyomo.environ import *

from .dispatch_utils import add_model_attr
component_name = 'power_vars'

@add_model_attr(component_name, requires = {'data_loader': None, 'status_vars': None})
def thermal_power_vars(model):
    '''
    Power generated by each thermal generator in each time period.
    The bounds are set by the generation_limits component.
    '''
    model.PowerGenerated = Var(model.ThermalGenerators, model.TimePeriods, within=NonNegativeReals)

    return
