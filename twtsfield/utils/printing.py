# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines a set of generic functions for printing setup information.
"""
import math
from twtsfield import __version__
from twtsfield.utils.threading import threading_enabled, nthreads

def print_twts_setup( field, verbose_level=1 ):
    """
    Print information about a TWTS field functor.
    - Version of twtsfield
    - Field type and dimensionality
    - Number of threads in case of CPU multi-threading
    - (Additional detailed information on the laser and the grid)

    Parameters
    ----------
    field: a TWTSFieldE or TWTSFieldB object
        Contains all the information of the TWTS setup

    verbose_level: int, optional
        Level of detail of the setup information
        0 - Print no information
        1 (Default) - Print basic information
        2 - Print detailed information
    """
    if verbose_level > 0:
        laser = field.laser
        grid = field.grid
        message = '\ntwtsfield (%s)\n' %__version__
        message += '\nTWTS %s-field background, %dD simulation, ' \
            %(field.fieldtype, field.dim)
        if threading_enabled:
            message += 'running on CPU (%d threads)' %nthreads
        else:
            message += 'running on CPU (1 thread)'
        if laser.auto_tdelay:
            message += '\nTime delay (auto): %.4e s' %field.tdelay
        else:
            message += '\nTime delay (user): %.4e s' %field.tdelay
        # Detailed information
        if verbose_level == 2:
            message += '\n\nLaser parameters:'
            message += '\n  phi: %.4f deg' %math.degrees( laser.phi )
            message += '\n  Pulse-front tilt phiT: %.4f deg' \
                %math.degrees( laser.phi_tilt )
            message += '\n  beta_0: %s' %laser.beta_0
            message += '\n  Wavelength: %.4e m' %laser.wavelength_SI
            message += '\n  Pulse length (sigma of intensity): %.4e s' \
                %laser.pulselength_SI
            message += '\n  Waists (w_x, w_y): %.4e m, %.4e m' \
                %(laser.w_x_SI, laser.w_y_SI)
            message += '\n  Focus position along y: %.4e m' %laser.focus_y_SI
            message += '\n\nGrid:'
            message += '\n  Global size (cells): %s' %(tuple(grid.global_size),)
            message += '\n  Cell size: %s m' %(tuple(grid.cell_size_SI),)
            message += '\n  Timestep: %.4e s' %grid.dt
            message += '\n  Laser origin (cells): %s' \
                %(tuple(field.laser_origin),)
        message += '\n'
        print( message )
