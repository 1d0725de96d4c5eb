#!/bin/env python

# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
from setuptools import setup, find_packages
import twtsfield # In order to extract the version number

# Obtain the long description from README.md
with open('./README.md') as f:
    long_description = f.read()
# Get the package requirements from the requirements.txt file
with open('requirements.txt') as f:
    install_requires = [ line.strip('\n') for line in f.readlines() ]

setup(
    name='twtsfield',
    version=twtsfield.__version__,
    description='Analytic TWTS laser background fields for PIC simulations',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='BSD-3-Clause-LBNL',
    packages=find_packages('.', exclude=['tests']),
    install_requires=install_requires,
    extras_require = {
        'test': ['pytest'],
    },
    include_package_data=True,
    platforms='any',
    classifiers=[
        'Programming Language :: Python',
        'Development Status :: 3 - Alpha',
        'Natural Language :: English',
        'Intended Audience :: Science/Research',
        'Operating System :: OS Independent',
        'Topic :: Scientific/Engineering :: Physics',
        'Programming Language :: Python :: 3'],
    )
