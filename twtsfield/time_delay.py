# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines the time delay of the TWTS pulse, and the conversion from the
simulation timestep to the time at which the TWTS fields are evaluated.
"""
import math
from scipy.constants import c

# Fudge factor: number of pulse lengths between the center of the pulse
# and the simulation volume, so that the pulse enters at low intensity
tdelay_margin = 3.

def get_tdelay_SI( auto_tdelay, tdelay_user_SI, half_sim_size, cell_size_SI,
                   pulselength_SI, focus_y_SI, phi, beta_0, c=c ):
    """
    Obtain the time delay (in seconds) that is subtracted from the
    simulation time, when evaluating the TWTS fields.

    Parameters
    ----------
    auto_tdelay: bool
        Whether to calculate the time delay such that the TWTS pulse is
        not inside the simulation volume at timestep 0.

    tdelay_user_SI: float (in second)
        The time delay that is returned when `auto_tdelay` is False

    half_sim_size: sequence of 2 or 3 ints
        The center of the simulation volume, in number of cells

    cell_size_SI: sequence of 2 or 3 floats (in meter)
        The size of the cells along each axis

    pulselength_SI: float (in second)
        Sigma of the standard Gaussian of the intensity (E^2)

    focus_y_SI: float (in meter)
        Distance of the laser focus along y

    phi: float (in radian)
        Interaction angle between the laser and the y axis

    beta_0: float
        Propagation speed of the overlap, normalized to the speed of light

    c: float (in meter/second), optional
        The speed of light

    Returns
    -------
    tdelay: float (in second)
    """
    if not auto_tdelay:
        return( tdelay_user_SI )

    dim = len(half_sim_size)
    if dim == 3:
        # Half-depth of the simulation volume (along z)
        axis = 2
    elif dim == 2:
        # In 2D, there is no z axis: the half-width (along x) is used
        axis = 0
    else:
        raise ValueError('Unsupported dimensionality: %s' %dim)

    # Angle between the laser pulse front and the y axis
    # (good approximation for beta_0 close to 1)
    eta = 0.5*math.pi - 0.5*phi
    # Walk-off of the pulse along y, across the transverse half-size of the
    # box (abs() gives the correct offset for |phi| > 90 degrees)
    y1 = float( half_sim_size[axis]*cell_size_SI[axis] )*abs( math.cos(eta) )
    # Approximate cross section of the pulse through the y axis
    y2 = tdelay_margin*(pulselength_SI*c)/math.cos(eta)
    # Position of the origin of the laser coordinate system along y
    y3 = focus_y_SI

    return( (y1 + y2 + y3)/(c*beta_0) )

def get_time_SI( current_step, dt, tdelay ):
    """
    Return the time (in seconds) at which the TWTS fields are evaluated,
    at the simulation timestep `current_step`
    """
    return( float(current_step)*dt - tdelay )
