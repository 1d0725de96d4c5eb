# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines the compilation decorators used for multithreaded CPU execution.
"""
import os, sys
import warnings
from numba import njit
import numba

# By default threading is enabled, except on Windows (not supported by Numba)
threading_enabled = True
if sys.platform == 'win32':
    threading_enabled = False

# Check if the environment variable TWTSFIELD_DISABLE_THREADING is set to 1
# and in that case, disable threading
if 'TWTSFIELD_DISABLE_THREADING' in os.environ:
    if int(os.environ['TWTSFIELD_DISABLE_THREADING']) == 1:
        threading_enabled = False
# If the user requests threading, check that numba provides it
if threading_enabled:
    try:
        from numba import prange as numba_prange
    except ImportError:
        threading_enabled = False
        warnings.warn(
            'Threading not available for the field evaluation.\n'
            'Fields will still be computed, but using only 1 thread on CPU.')

# Check if the environment variable TWTSFIELD_DISABLE_CACHING is set to 1
# and in that case, disable caching of the compiled functions
caching = True
if 'TWTSFIELD_DISABLE_CACHING' in os.environ:
    if int(os.environ['TWTSFIELD_DISABLE_CACHING']) == 1:
        caching = False

# The analytic fields may hit 0-divisions (e.g. for a singular pulse-front
# tilt): with the numpy error model, these give inf/nan instead of raising.
error_model = 'numpy'

# Set the function njit_parallel and prange to the correct object
if not threading_enabled:
    njit_parallel = njit( cache=caching, error_model=error_model )
    prange = range
    nthreads = 1
else:
    njit_parallel = njit( parallel=True, cache=caching,
                          error_model=error_model )
    prange = numba_prange
    nthreads = numba.config.NUMBA_NUM_THREADS

# Serial compilation, for the per-cell (inline) functions
njit_inline = njit( cache=caching, error_model=error_model )
