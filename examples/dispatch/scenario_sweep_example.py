#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

## Example of a fuel price sweep: how much renewable capacity is
## built as the fuel gets more expensive
import os

import pandas as pd

from plantopt.data.model_data import ModelData
from plantopt.models.dispatch import solve_dispatch_scenarios
from plantopt.models.summary import renewable_share

this_module_path = os.path.dirname(os.path.abspath(__file__))
md = ModelData.read(os.path.join(this_module_path, '..', '..', 'plantopt', 'models',
                                 'tests', 'dispatch_test_instances', 'partial_load_4.json'))

scenarios = { 'fuel_{}'.format(fuel_cost) : {'generator': {'Gas': {'fuel_cost': fuel_cost}}}
              for fuel_cost in [2., 4., 8., 16.] }

results = solve_dispatch_scenarios(md, scenarios, 'appsi_highs', solver_tee=False)

table = pd.DataFrame({ name : { 'total_cost' : md_sol.data['system']['total_cost'],
                                'pv_capacity' : md_sol.data['elements']['generator']['PV']['installed_capacity'],
                                'renewable_share' : renewable_share(md_sol),
                              }
                       for name, md_sol in results.items() }).T
print(table)
