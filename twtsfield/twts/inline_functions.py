# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines inline functions that are compiled with numba (see
numba_methods.py), and that are used to evaluate the TWTS fields at a
single point of the grid.

The rotation functions only use standard arithmetic, and therefore also
work element-wise on numpy arrays.
"""
import math
import cmath
from twtsfield.parameters import get_tilt_angle

# Rotation of positions and fields
# --------------------------------

def rotate_position_3d( x, y, z, phi ):
    """
    Rotate a position of the simulation frame into the frame of the
    TWTS field functions.

    The laser propagation direction encloses an angle phi with the
    simulation y axis (direction of the sliding window), hence the
    position is rotated around the x axis, with RotationMatrix[pi/2+phi].
    (The 180 degree flip at phi = 90 degrees is needed since the coordinate
    system of the TWTS model is oriented the other way round.)
    """
    sinPhi = math.sin(phi)
    cosPhi = math.cos(phi)
    return( x, -sinPhi*y - cosPhi*z, cosPhi*y - sinPhi*z )

def rotate_position_2d( x, y, phi ):
    """
    Rotate a position (x, y) of a 2D simulation into the (y, z) plane of
    the TWTS field functions, in which the simulation x axis plays the
    role of the TWTS z axis.

    Returns the TWTS (y, z) coordinates; the TWTS x coordinate is 0.
    """
    sinPhi = math.sin(phi)
    cosPhi = math.cos(phi)
    return( -sinPhi*y - cosPhi*x, cosPhi*y - sinPhi*x )

def rotate_field_back( Fy_a, Fz_a, Fy_b, Fz_b, phi ):
    """
    Rotate a field vector from the frame of the TWTS field functions back
    into the simulation frame, with RotationMatrix[-(pi/2+phi)].

    On a staggered grid, the two rotated components are located at
    different positions: (Fy_a, Fz_a) are evaluated at the position of
    the first component and (Fy_b, Fz_b) at the position of the second one.
    """
    sinPhi = math.sin(phi)
    cosPhi = math.cos(phi)
    return( -sinPhi*Fy_a + cosPhi*Fz_a, -cosPhi*Fy_b - sinPhi*Fz_b )

def get_cell_position_SI( i_cell, offset, origin, cell_size_SI ):
    """
    Return the position (in meters) of a field component along one axis,
    relative to the laser origin.
    """
    return( (offset + (i_cell - origin))*cell_size_SI )

# Analytic TWTS fields
# --------------------
# The functions below take positions and time normalized to
# UNIT_LENGTH = c*dt and UNIT_TIME = dt (see get_twts_constants).
# The "helpVar" variables decrease the nesting level of the expressions,
# and their grouping limits the cancellations near the singular
# denominators: they must not be simplified or reordered.

def get_twts_constants( phi, beta_0, wavelength_SI, pulselength_SI,
                        w_x_SI, w_y_SI, unit_time, c ):
    """
    Return the normalized constants of the TWTS field formulas.

    Returns
    -------
    A tuple (phiT, om0, tauG, rho0, wy, k, unit_length) where `unit_length`
    (in meter) is the length unit used for the normalization
    """
    UNIT_TIME = unit_time
    UNIT_LENGTH = UNIT_TIME*c

    # Pulse-front tilt angle. For beta_0 = 1, this is equal to phi.
    # (The TWTS pulse is defined for beta_0 = 1; for other values,
    # phi only sets the tilt and the dispersion of the pulse.)
    phiT = get_tilt_angle( phi, beta_0 )

    cspeed = 1.
    lambda0 = wavelength_SI/UNIT_LENGTH
    om0 = 2.*math.pi*cspeed/lambda0
    # factor 2 in tauG arises from the definition convention of the formula
    tauG = pulselength_SI*2./UNIT_TIME
    w0 = w_x_SI/UNIT_LENGTH
    rho0 = math.pi*w0*w0/lambda0
    # wy is the width of the TWTS pulse
    wy = w_y_SI/UNIT_LENGTH
    k = 2.*math.pi/lambda0

    return( phiT, om0, tauG, rho0, wy, k, UNIT_LENGTH )

def calc_twts_Ex( x, y, z, t, phiT, om0, tauG, rho0, wy, k ):
    """
    Calculate the Ex component of the TWTS field, normalized to its peak
    amplitude, at the (normalized) position x, y, z and time t
    """
    cspeed = 1.

    # Shortcuts for the trigonometric functions of the tilt angle
    sinPhi = math.sin(phiT)
    cosPhi = math.cos(phiT)
    sinPhi2 = math.sin(phiT/2.)
    cosPhi2 = math.cos(phiT/2.)
    tanPhi2 = math.tan(phiT/2.)
    cotPhi = math.tan(math.pi/2. - phiT)

    helpVar1 = 1j*rho0 - y*cosPhi - z*sinPhi
    helpVar2 = -1j*cspeed*om0*tauG*tauG \
        - y*cosPhi/cosPhi2/cosPhi2*tanPhi2 \
        - 2.*z*tanPhi2*tanPhi2
    helpVar3 = 1j*rho0 - y*cosPhi - z*sinPhi

    helpVar4 = (
        -(cspeed*cspeed*k*om0*tauG*tauG*wy*wy*x*x)
        - 2.*cspeed*cspeed*om0*t*t*wy*wy*rho0
        + 2j*cspeed*cspeed*om0*om0*t*tauG*tauG*wy*wy*rho0
        - 2.*cspeed*cspeed*om0*tauG*tauG*y*y*rho0
        + 4.*cspeed*om0*t*wy*wy*z*rho0
        - 2j*cspeed*om0*om0*tauG*tauG*wy*wy*z*rho0
        - 2.*om0*wy*wy*z*z*rho0
        - 8j*om0*wy*wy*y*(cspeed*t - z)*z*sinPhi2*sinPhi2
        + 1j*(8./sinPhi)*(
                + 2.*z*z*(cspeed*om0*t*wy*wy + 1j*cspeed*y*y - om0*wy*wy*z)
                + y*(
                    + cspeed*k*wy*wy*x*x
                    - 2j*cspeed*om0*t*wy*wy*rho0
                    + 2.*cspeed*y*y*rho0
                    + 2j*om0*wy*wy*z*rho0
                )*(cotPhi/sinPhi)
            )*sinPhi2*sinPhi2*sinPhi2*sinPhi2
        - 2j*cspeed*cspeed*om0*t*t*wy*wy*z*sinPhi
        - 2.*cspeed*cspeed*om0*om0*t*tauG*tauG*wy*wy*z*sinPhi
        - 2j*cspeed*cspeed*om0*tauG*tauG*y*y*z*sinPhi
        + 4j*cspeed*om0*t*wy*wy*z*z*sinPhi
        + 2.*cspeed*om0*om0*tauG*tauG*wy*wy*z*z*sinPhi
        - 2j*om0*wy*wy*z*z*z*sinPhi
        - 4.*cspeed*om0*t*wy*wy*y*rho0*tanPhi2
        + 4.*om0*wy*wy*y*z*rho0*tanPhi2
        + 2j*y*y*(
            + cspeed*om0*t*wy*wy + 1j*cspeed*y*y - om0*wy*wy*z
            )*cosPhi*cosPhi/cosPhi2/cosPhi2*tanPhi2
        + 2j*cspeed*k*wy*wy*x*x*z*tanPhi2*tanPhi2
        - 2.*om0*wy*wy*y*y*rho0*tanPhi2*tanPhi2
        + 4.*cspeed*om0*t*wy*wy*z*rho0*tanPhi2*tanPhi2
        + 4j*cspeed*y*y*z*rho0*tanPhi2*tanPhi2
        - 4.*om0*wy*wy*z*z*rho0*tanPhi2*tanPhi2
        - 2j*om0*wy*wy*y*y*z*sinPhi*tanPhi2*tanPhi2
        - 2.*y*cosPhi*(
            + om0*(
                + cspeed*cspeed*(
                      1j*t*t*wy*wy
                    + om0*t*tauG*tauG*wy*wy
                    + 1j*tauG*tauG*y*y
                    )
                - cspeed*(2j*t + om0*tauG*tauG)*wy*wy*z
                + 1j*wy*wy*z*z
                )
            + 2j*om0*wy*wy*y*(cspeed*t - z)*tanPhi2
            + 1j*tanPhi2*tanPhi2*(
                  -4j*cspeed*y*y*z
                + om0*wy*wy*(y*y - 4.*(cspeed*t - z)*z)
            )
        )
    )/(2.*cspeed*wy*wy*helpVar1*helpVar2)

    helpVar5 = cspeed*om0*tauG*tauG \
        - 1j*(8.*y*cotPhi/sinPhi/sinPhi*sinPhi2*sinPhi2*sinPhi2*sinPhi2) \
        - 2j*z*tanPhi2*tanPhi2
    result = (cmath.exp(helpVar4)*tauG
        *cmath.sqrt((cspeed*om0*rho0)/helpVar3))/cmath.sqrt(helpVar5)
    return( result.real )

def calc_twts_By( x, y, z, t, phiT, om0, tauG, rho0, wy, k ):
    """
    Calculate the By component of the TWTS field, normalized to the peak
    amplitude of the electric field, at the (normalized) position x, y, z
    and time t
    """
    cspeed = 1.

    sinPhi = math.sin(phiT)
    cosPhi = math.cos(phiT)
    cosPhi2 = math.cos(phiT/2.)
    tanPhi2 = math.tan(phiT/2.)
    cotPhi = math.tan(math.pi/2. - phiT)

    helpVar1 = rho0 + 1j*y*cosPhi + 1j*z*sinPhi
    helpVar2 = cspeed*om0*tauG*tauG \
        + 2j*(-z - y*cotPhi)*tanPhi2*tanPhi2
    helpVar3 = 1j*rho0 - y*cosPhi - z*sinPhi

    helpVar4 = -1.*(
        cspeed*cspeed*k*om0*tauG*tauG*wy*wy*x*x
        + 2.*cspeed*cspeed*om0*t*t*wy*wy*rho0
        - 2j*cspeed*cspeed*om0*om0*t*tauG*tauG*wy*wy*rho0
        + 2.*cspeed*cspeed*om0*tauG*tauG*y*y*rho0
        - 4.*cspeed*om0*t*wy*wy*z*rho0
        + 2j*cspeed*om0*om0*tauG*tauG*wy*wy*z*rho0
        + 2.*om0*wy*wy*z*z*rho0
        + 4.*cspeed*om0*t*wy*wy*y*rho0*tanPhi2
        - 4.*om0*wy*wy*y*z*rho0*tanPhi2
        - 2j*cspeed*k*wy*wy*x*x*z*tanPhi2*tanPhi2
        + 2.*om0*wy*wy*y*y*rho0*tanPhi2*tanPhi2
        - 4.*cspeed*om0*t*wy*wy*z*rho0*tanPhi2*tanPhi2
        - 4j*cspeed*y*y*z*rho0*tanPhi2*tanPhi2
        + 4.*om0*wy*wy*z*z*rho0*tanPhi2*tanPhi2
        - 2j*cspeed*k*wy*wy*x*x*y*cotPhi*tanPhi2*tanPhi2
        - 4.*cspeed*om0*t*wy*wy*y*rho0*cotPhi*tanPhi2*tanPhi2
        - 4j*cspeed*y*y*y*rho0*cotPhi*tanPhi2*tanPhi2
        + 4.*om0*wy*wy*y*z*rho0*cotPhi*tanPhi2*tanPhi2
        + 2.*z*sinPhi*(
            + om0*(
                + cspeed*cspeed*(
                      1j*t*t*wy*wy
                    + om0*t*tauG*tauG*wy*wy
                    + 1j*tauG*tauG*y*y
                )
                - cspeed*(2j*t + om0*tauG*tauG)*wy*wy*z
                + 1j*wy*wy*z*z
                )
            + 2j*om0*wy*wy*y*(cspeed*t - z)*tanPhi2
            + 1j*tanPhi2*tanPhi2*(
                  -2j*cspeed*y*y*z
                + om0*wy*wy*(y*y - 2.*(cspeed*t - z)*z)
            )
        )
        + 2.*y*cosPhi*(
            + om0*(
                + cspeed*cspeed*(
                      1j*t*t*wy*wy
                    + om0*t*tauG*tauG*wy*wy
                    + 1j*tauG*tauG*y*y
                )
                - cspeed*(2j*t + om0*tauG*tauG)*wy*wy*z
                + 1j*wy*wy*z*z
                )
            + 2j*om0*wy*wy*y*(cspeed*t - z)*tanPhi2
            + 1j*(
                  -4j*cspeed*y*y*z
                + om0*wy*wy*(y*y - 4.*(cspeed*t - z)*z)
                - 2.*y*(
                    + cspeed*om0*t*wy*wy
                    + 1j*cspeed*y*y
                    - om0*wy*wy*z
                    )*cotPhi
                )*tanPhi2*tanPhi2
        )
    )/(2.*cspeed*wy*wy*helpVar1*helpVar2)

    helpVar5 = -1j*cspeed*om0*tauG*tauG \
        + (-z - y*cotPhi)*tanPhi2*tanPhi2*2.
    helpVar6 = (cspeed*(cspeed*om0*tauG*tauG
        + 2j*(-z - y*cotPhi)*tanPhi2*tanPhi2))/(om0*rho0)
    result = (cmath.exp(helpVar4)*tauG/cosPhi2/cosPhi2
        *(rho0 + 1j*y*cosPhi + 1j*z*sinPhi)
        *(
              2j*cspeed*t + cspeed*om0*tauG*tauG - 4j*z
            + cspeed*(2j*t + om0*tauG*tauG)*cosPhi
            + 2j*y*tanPhi2
        )*helpVar3**(-1.5)
    )/(2.*helpVar5*cmath.sqrt(helpVar6))
    return( result.real )

def calc_twts_Bz( x, y, z, t, phiT, om0, tauG, rho0, wy, k ):
    """
    Calculate the Bz component of the TWTS field, normalized to the peak
    amplitude of the electric field, at the (normalized) position x, y, z
    and time t
    """
    cspeed = 1.

    sinPhi = math.sin(phiT)
    cosPhi = math.cos(phiT)
    sinPhi2 = math.sin(phiT/2.)
    cosPhi2 = math.cos(phiT/2.)
    tanPhi2 = math.tan(phiT/2.)
    cotPhi = math.tan(math.pi/2. - phiT)

    helpVar1 = -(cspeed*z) - cspeed*y*cotPhi + 1j*(cspeed*rho0/sinPhi)
    helpVar2 = 1j*rho0 - y*cosPhi - z*sinPhi
    helpVar3 = helpVar2*cspeed
    helpVar4 = cspeed*om0*tauG*tauG \
        - 1j*y*cosPhi/cosPhi2/cosPhi2*tanPhi2 \
        - 2j*z*tanPhi2*tanPhi2
    helpVar5 = 2.*cspeed*t - 1j*cspeed*om0*tauG*tauG - 2.*z \
        + 8.*y/sinPhi/sinPhi/sinPhi*sinPhi2*sinPhi2*sinPhi2*sinPhi2 \
        - 2.*z*tanPhi2*tanPhi2

    helpVar6 = (
        (om0*y*rho0/cosPhi2/cosPhi2/cosPhi2/cosPhi2)/helpVar1
        - (2j*k*x*x)/helpVar2
        - (1j*om0*om0*tauG*tauG*rho0)/helpVar2
        - (4j*y*y*rho0)/(wy*wy*helpVar2)
        + (om0*om0*tauG*tauG*y*cosPhi)/helpVar2
        + (4.*y*y*y*cosPhi)/(wy*wy*helpVar2)
        + (om0*om0*tauG*tauG*z*sinPhi)/helpVar2
        + (4.*y*y*z*sinPhi)/(wy*wy*helpVar2)
        + (2j*om0*y*y*cosPhi/cosPhi2/cosPhi2*tanPhi2)/helpVar3
        + (om0*y*rho0*cosPhi/cosPhi2/cosPhi2*tanPhi2)/helpVar3
        + (1j*om0*y*y*cosPhi*cosPhi/cosPhi2/cosPhi2*tanPhi2)/helpVar3
        + (4j*om0*y*z*tanPhi2*tanPhi2)/helpVar3
        - (2.*om0*z*rho0*tanPhi2*tanPhi2)/helpVar3
        - (2j*om0*z*z*sinPhi*tanPhi2*tanPhi2)/helpVar3
        - (om0*helpVar5*helpVar5)/(cspeed*helpVar4)
        )/4.

    helpVar7 = cspeed*om0*tauG*tauG \
        - 1j*y*cosPhi/cosPhi2/cosPhi2*tanPhi2 \
        - 2j*z*tanPhi2*tanPhi2
    result = (2j*cmath.exp(helpVar6)*tauG*tanPhi2
        *(cspeed*t - z + y*tanPhi2)
        *cmath.sqrt((om0*rho0)/helpVar3)
        )/helpVar7**1.5
    return( result.real )
