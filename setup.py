#  ___________________________________________________________________________
#
#  PLANTOPT: Plant Capacity and Dispatch Optimization Tools
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

from setuptools import setup, find_packages
from pathlib import Path

DISTNAME = 'plantopt'
VERSION = '0.1.0.dev0'
PACKAGES = find_packages(include=['plantopt', 'plantopt.*'])
EXTENSIONS = []
DESCRIPTION = 'PLANTOPT: Plant Capacity and Dispatch Optimization Tools.'
LICENSE = 'Revised BSD'

setuptools_kwargs = {
    'zip_safe': False,
    'scripts': [],
    'include_package_data': True,
    'package_data': {'plantopt.models.tests': ['dispatch_test_instances/*.json']},
    'install_requires': ['pyomo>=6.4', 'numpy', 'pandas', 'highspy'],
    'extras_require': {'test': ['pytest', 'parameterized']},
    'python_requires' : '>=3.7, <4',
}

this_directory = Path(__file__).parent
long_description = (this_directory / 'README.md').read_text()

setup(name=DISTNAME,
      version=VERSION,
      packages=PACKAGES,
      ext_modules=EXTENSIONS,
      description=DESCRIPTION,
      license=LICENSE,
      long_description=long_description,
      long_description_content_type='text/markdown',
      **setuptools_kwargs)
