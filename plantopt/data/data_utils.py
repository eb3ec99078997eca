#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This module defines some utilities for handling ModelData dictionaries
"""
import copy as cp

def is_time_series(att):
    return isinstance(att, dict) and att.get('data_type') == 'time_series'

def time_series_values(att, num_time_periods):
    '''
    Returns the list of values for attribute att over num_time_periods,
    broadcasting scalars over the horizon
    '''
    if is_time_series(att):
        return list(att['values'])
    return [att]*num_time_periods

def _copy_only_in_service(data_dict):
    new_dd = dict()
    for key, value in data_dict.items():
        if key == 'elements':
            ## value is the elements dictionary
            new_dd[key] = dict()
            new_elements = new_dd[key]
            for elements_name, elements in value.items():
                new_elements[elements_name] = dict()
                new_element_dict = new_elements[elements_name]
                for element_name, element in elements.items():
                    if 'in_service' in element and (not element['in_service']):
                        continue
                    else:
                        new_element_dict[element_name] = cp.deepcopy(element)
        else:
            new_dd[key] = cp.deepcopy(value)
    return new_dd

def _infer_file_type(filename):
    if filename[-5:] == '.json':
        return 'json'
    elif filename[-8:] == '.json.gz':
        return 'json.gz'
    return None

def _read_from_file(filename, file_type):
    valid_file_types = ['json', 'json.gz']
    if file_type is not None and file_type not in valid_file_types:
        raise Exception("Unrecognized file_type {}. Valid file types are {}".format(file_type, valid_file_types))
    elif file_type is None:
        ## identify the file type
        file_type = _infer_file_type(filename)
        if file_type is None:
            raise Exception("Could not infer type of file {} from its extension!".format(filename))

    if file_type == 'json':
        import json
        with open(filename) as f:
            data = json.load(f)
    elif file_type == 'json.gz':
        import json
        import gzip
        with gzip.open(filename, 'rt') as f:
            data = json.load(f)
    return data
