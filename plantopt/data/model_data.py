#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
The data used for building models in PLANTOPT is stored in a nested Python dictionary.
The format for this dictionary is as follows:

.. code-block:: python
   :linenos:

    {
    'elements':
        {
        <element-type>:
            {
            <element-name>:
                {
                <attribute-1>: <value-1>,
                <attribute-2>: <value-2>,
                ...
                }
            }
        }
    'system':
        {
        <attribute-1>, <value-1>
        }
    }

* The main level must contain the following keys: "elements" and "system".

* data["elements"] is a dictionary where the keys are the element types ("generator",
  "load" and, optionally, "export"). Each of these is a dictionary where the keys are
  the model element names. Each of these is a dictionary containing the attributes and values.

* Attributes on modeling elements are typically floats. If an attribute is itself a
  dictionary with "data_type" equal to "time_series", then its "values" key holds a list
  with one entry per time period in data["system"]["time_keys"]. Scalar attributes are
  used for every time period.

* data["system"] holds the time horizon ("time_keys", and optionally
  "time_period_length_minutes", which defaults to 60). After a solve the system-wide
  results (total cost, cost breakdown, marginal prices) are stored here as well.

For an example of the dictionary data structure, see the following:

.. code-block:: python
   :linenos:

    {
    'elements':
        {
        'generator':
            {
            'PV': {
                  'generator_type': 'renewable',
                  'investment_cost': 50.0,
                  'capacity_factor': {
                      'data_type':'time_series',
                      'values': [0.0, 0.6, 0.2]
                      },
                  },
            'Gas': {
                  'generator_type': 'thermal',
                  'investment_cost': 30.0,
                  'fuel_cost': 4.0,
                  'startup_cost': 2.0,
                  'efficiency_min': 0.35,
                  'efficiency_max': 0.55,
                  'partial_load_min': 0.4,
                  },
             },
        'load':
            {
            'L1': {
                  'p_load': {
                      'data_type':'time_series',
                      'values': [5.0, 8.0, 6.0]
                      },
                }
            }
        },
    'system': {
              'time_keys': ['1', '2', '3'],
              'time_period_length_minutes': 60,
              },
    }

This module provides the helper class :py:class:`ModelData` that
provides utilities for interacting and manipulating this
nested dictionary structure.

"""
import logging
import copy as cp
import plantopt.data.data_utils as du
logger = logging.getLogger('plantopt.model_data')

class ModelData(object):
    @staticmethod
    def empty_model_data_dict():
        """
        Create an empty model_data dictionary with the high-level "elements"
        and "system" keys.

        Returns
        -------
            dict : a new model_data dictionary
        """
        return {"elements": dict(), "system": dict()}

    def __init__(self, source=None, file_type=None):
        """
        Create a new ModelData object to wrap a model_data dictionary with some helper methods.

        Parameters
        ----------
        source : dict, str, ModelData, or None (optional)
            If dict, an initial model_data dictionary.
            If str, a path to a file which is parsable by PLANTOPT.
            If ModelData, the original is copies into the new ModelData.
            If None, a blank model_data dictionary is created.

        file_type : str or None (optional)
            If source is str, this is the specification of the file_type.
            Valid values are 'json' and 'json.gz'. If None, the file type is
            inferred from the extension.
        """
        if isinstance(source, dict):
            self.data = source
        elif isinstance(source, str):
            self.data = du._read_from_file(source, file_type)
        elif isinstance(source, ModelData):
            self.data = source.clone().data
        elif source is None:
            self.data = ModelData.empty_model_data_dict()
        else:
            raise RuntimeError("Unrecognized source for ModelData")

    @classmethod
    def read(cls, filename, file_type=None):
        """
        Reads data from a file into a new ModelData object

        Parameters
        ----------
        filename : str
            The path to the file
        file_type : None,str (optional)
            The specification of the file_type. Valid values are 'json' and 'json.gz'.
            If None, the file type is inferred from the extension.
        """
        return cls(source=du._read_from_file(filename, file_type))

    def elements(self, element_type, **kwargs):
        """
        A python generator that loops over modeling elements of a particular element type
        and, if requested, other sub-attributes

        This method provides a generator that loops over the model elements (dictionaries)
        defined in model_data["elements"][element_type]. If additional arguments are provided,
        then those subattributes are also tested.

        Parameters
        ----------
        element_type : str
           Desired element type.
        **kwargs : key=str named arguments
           Additional arguments provides key=value pairs to test on each element.

        Returns
        -------
            generator

        """
        if element_type not in self.data['elements'].keys():
            return

        if len(kwargs) == 0:
            for name, elem in self.data['elements'][element_type].items():
                yield name, elem
            return

        # additional attributes have been specified
        for name, elem in self.data['elements'][element_type].items():
            include = True
            for k, v in kwargs.items():
                if k not in elem or elem[k] != v:
                    include = False
                    break
            if include:
                yield name, elem

    def attributes(self, element_type, **kwargs):
        """
        Returns a dictionary arranged by attribute -- element-name -- value instead of
        element-name -- attribute -- value.

        This method loops over the modeling elements of a particular element type
        and, if requested, filtes using other sub-attributes. While the original
        structure follows:

        >>> data['elements'][<element-name>][<attribute>] = <value>  # doctest: +SKIP

        the returned dictionary follows:

        >>> d[<attribute>][<element-name>] = <value>  # doctest: +SKIP

        Note that this call is actually building a dictionary (not a generator).
        Unlike the element dictionaries, the returned dictionary always has a
        'names' key, even if no elements of this type exist.

        Parameters
        ----------
        element_type : str
           Desired element type.
        **kwargs : key=str named arguments
           Additional arguments provides key=value pairs to test on each element.

        Returns
        -------
            dict

        """
        retdict = dict()
        retdict['names'] = list()

        if element_type not in self.data['elements']:
            return retdict

        for name, elem in self.elements(element_type=element_type, **kwargs):
            retdict['names'].append(name)
            for attrib, value in elem.items():
                if attrib not in retdict:
                    retdict[attrib] = dict()
                retdict[attrib][name] = value

        return retdict

    def clone(self):
        """
        Create a copy of this ModelData object using a deep copy on the underlying dictionary

        Returns
        -------
            ModelData
        """
        return ModelData(cp.deepcopy(self.data))

    def clone_in_service(self):
        """
        Create a copy of this ModelData object using a deep copy on the underlying dictionary,
        only returning the elements for which the in_service flag is not set to False

        Returns
        -------
            ModelData
        """
        return ModelData(du._copy_only_in_service(self.data))

    def write(self, filename, file_type=None):
        """
        Dumps the ModelData object dict to the specified file.
        Optionally, the file_type can be specified if not inferred.

        Parameters
        ----------
        filename : str
            The full filename including extension and path.
        file_type : None
            If specified, the encoding used when writing the file.
            If None, it will be inferred from the file extension.
        """
        valid_file_types = ['json', 'json.gz']
        if file_type is not None and file_type not in valid_file_types:
            raise Exception("Unrecognized file_type {}. Valid file types are {}".format(file_type, valid_file_types))
        elif file_type is None:
            file_type = du._infer_file_type(filename)
            if file_type is None:
                logger.warning("Unrecognized file_type for file {} in ModelData.write, using 'json'".format(filename))
                file_type = 'json'

        if file_type == 'json':
            import json
            with open(filename,'w') as f:
                json.dump(self.data, f)
        elif file_type == 'json.gz':
            import json
            import gzip
            with gzip.open(filename, 'wt') as f:
                json.dump(self.data, f)
        logger.debug("ModelData written to {}".format(filename))
