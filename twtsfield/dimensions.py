# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines how the (3D) TWTS field functions are mapped onto the field
components of a 2D or 3D simulation.

In 2D, the simulation plane is (x, y) and the laser propagates within it.
The 3D TWTS functions are reused with the following relabeling:

    3D     2D
    x -->  z   (x = 0 in the TWTS functions, since there is no z in 2D)
    y -->  y
    z --> -x
    Ex --> Ez  (evaluated at the Yee-cell position of Ez)
    By --> By
    Bz --> -Bx
"""
from collections import namedtuple

DimensionLayout = namedtuple( 'DimensionLayout', [
    # Dimensionality of the simulation
    'dim',
    # Index of the component whose grid offset is used for the TWTS Ex
    # and index of the component of the returned E vector that it fills
    'e_component', 'e_output',
    # Indices of the components whose grid offsets are used for the
    # TWTS By and Bz (each evaluated at both positions), and indices of
    # the components of the returned B vector that they fill
    'b_first_component', 'b_second_component',
    'b_first_output', 'b_second_output',
    # Sign applied to the TWTS Bz
    'bz_sign',
    # Whether the in-plane axes are swapped before rotating the positions
    # of the B components
    'b_swap_axes' ] )

layout_3d = DimensionLayout( dim=3,
    e_component=0, e_output=0,
    b_first_component=1, b_second_component=2,
    b_first_output=1, b_second_output=2,
    bz_sign=1., b_swap_axes=False )

layout_2d = DimensionLayout( dim=2,
    e_component=2, e_output=2,
    b_first_component=1, b_second_component=0,
    b_first_output=1, b_second_output=0,
    bz_sign=-1., b_swap_axes=True )

def get_dimension_layout( dim ):
    """
    Return the DimensionLayout of a simulation of dimensionality `dim`
    """
    if dim == 3:
        return( layout_3d )
    elif dim == 2:
        return( layout_2d )
    else:
        raise ValueError('Unsupported dimensionality: %s' %dim)
