#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

"""
This is the logging configuration for PLANTOPT.

The documentation below is primarily for PLANTOPT developers.

Examples
========
To use the logger in your code, add the following
after your import
.. code-block:: python

   import logging
   logger = logging.getLogger('plantopt.path.to.module')

Then, you can use the standard logging functions
.. code-block:: python

   logger.debug('message')
   logger.info('message')
   logger.warning('message')
   logger.error('message')

Messages with a level of info or higher are written to stdout.
Model validation problems are logged at error level immediately
before the corresponding ConfigurationError is raised, and
defaults imposed by the model builder (e.g., a missing export
cap) are logged at warning level.

"""
import sys
import logging
log_format = '%(message)s'

# configure the root logger for plantopt
logger = logging.getLogger('plantopt')
logger.setLevel(logging.INFO)

if not logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    fmtr = logging.Formatter(log_format)
    console_handler.setFormatter(fmtr)
    logger.addHandler(console_handler)
