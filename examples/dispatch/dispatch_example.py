#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## Example of sizing and dispatching a small plant portfolio with
## both the partial-load and the unit commitment models
import os

from plantopt.data.model_data import ModelData
from plantopt.models.dispatch import solve_dispatch, \
        create_partial_load_model, create_unit_commitment_model
from plantopt.models.summary import cost_breakdown, dispatch_dataframe, event_counts

this_module_path = os.path.dirname(os.path.abspath(__file__))
test_instances = os.path.join(this_module_path, '..', '..', 'plantopt', 'models',
                              'tests', 'dispatch_test_instances')

## Create a PLANTOPT "ModelData" object, which is just a lightweight
## wrapper around a python dictionary, from a json test instance
print('Creating and solving partial_load_4')
md = ModelData.read(os.path.join(test_instances, 'partial_load_4.json'))

## solve the partial-load model using HiGHS -- could use 'cbc', 'glpk',
## or any valid Pyomo solver name, provided its available
md_sol = solve_dispatch(md, 'appsi_highs', solver_tee=False,
                        dispatch_model_generator=create_partial_load_model)
print('Solved!')

print(cost_breakdown(md_sol))
print(dispatch_dataframe(md_sol))

## the unit commitment model needs p_min and p_max for each thermal generator
print('Creating and solving unit_commitment_4')
md = ModelData.read(os.path.join(test_instances, 'unit_commitment_4.json'))
md_sol = solve_dispatch(md, 'appsi_highs', mipgap=0.0, solver_tee=False,
                        dispatch_model_generator=create_unit_commitment_model)
print('Solved!')

print('Objective value:', md_sol.data['system']['total_cost'])
print('Startups and shutdowns:', event_counts(md_sol))

## write the solution to a PLANTOPT *.json file
md_sol.write(os.path.join(this_module_path, 'unit_commitment_4_solution.json'))
print('Wrote solution to unit_commitment_4_solution.json')
