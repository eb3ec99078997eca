#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

'''
Helpers for constructing dispatch models
'''

from plantopt.model_library.dispatch import \
        params, status_vars, power_vars, capacity_expansion, \
        generation_limits, fuel_consumption, startup_costs, \
        power_balance, objective
from plantopt.model_library.dispatch.dispatch_utils import binary_status_vars
from collections import namedtuple
import pyomo.environ as pe

## tools for generating models

DispatchFormulation = namedtuple('DispatchFormulation',
                                 ['status_vars',
                                  'power_vars',
                                  'capacity_expansion',
                                  'generation_limits',
                                  'fuel_consumption',
                                  'startup_costs',
                                  'power_balance',
                                  'objective',
                                  ]
                                 )

def generate_model( model_data, dispatch_formulation, relax_binaries=False ):
    """
    returns a dispatch formulation as a concrete model with the
    components specified in a DispatchFormulation, with the option
    to relax the binary variables.

    Parameters
    ----------
    model_data : plantopt.data.ModelData
    dispatch_formulation : plantopt.model_library.dispatch.dispatch_model_generator.DispatchFormulation
        The named tuple with the specified formulation
    relax_binaries : bool, optional
        Relaxes all binary variables in the constructed model, resulting in a continuous problem.
        Default is False.

    Returns
    -------
        pyomo.environ.ConcreteModel : The dispatch formulation specified with the data
                                      from model_data

    Raises
    ------
        plantopt.common.errors.ConfigurationError : if model_data is malformed
    """

    md = model_data.clone_in_service()
    return _generate_model( md, *_get_formulation_from_DispatchFormulation( dispatch_formulation ), relax_binaries )

def _generate_model( model_data,
                    _status_vars,
                    _power_vars,
                    _capacity_expansion,
                    _generation_limits,
                    _fuel_consumption,
                    _startup_costs,
                    _power_balance,
                    _objective,
                    _relax_binaries = False,
                    ):

    model = pe.ConcreteModel()

    model.name = "Dispatch"

    ## the data loader needs to know which
    ## attributes of the thermal generators to read
    model.binary_commitment = _status_vars in binary_status_vars

    ## to relax binaries
    model.relax_binaries = _relax_binaries

    params.load_params(model, model_data)
    getattr(status_vars, _status_vars)(model)
    getattr(power_vars, _power_vars)(model)
    getattr(capacity_expansion, _capacity_expansion)(model)
    getattr(generation_limits, _generation_limits)(model)
    getattr(fuel_consumption, _fuel_consumption)(model)
    getattr(startup_costs, _startup_costs)(model)
    getattr(power_balance, _power_balance)(model)
    getattr(objective, _objective)(model)

    return model

def _get_formulation_from_DispatchFormulation( dispatch_formulation ):
    return [  dispatch_formulation.status_vars,
              dispatch_formulation.power_vars,
              dispatch_formulation.capacity_expansion,
              dispatch_formulation.generation_limits,
              dispatch_formulation.fuel_consumption,
              dispatch_formulation.startup_costs,
              dispatch_formulation.power_balance,
              dispatch_formulation.objective,
            ]
