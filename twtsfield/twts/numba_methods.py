# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines the evaluation of the TWTS fields on the CPU with numba:
the per-cell functions (position of the field components, analytic
fields, back-rotation) and the multithreaded kernels that apply them
to a block of cells.
"""
from twtsfield.utils.threading import njit_inline, njit_parallel, prange
# Import inline functions
from .inline_functions import rotate_position_3d, rotate_position_2d, \
    rotate_field_back, get_cell_position_SI, \
    calc_twts_Ex, calc_twts_By, calc_twts_Bz
# Compile the inline functions for CPU
rotate_position_3d = njit_inline(rotate_position_3d)
rotate_position_2d = njit_inline(rotate_position_2d)
rotate_field_back = njit_inline(rotate_field_back)
get_cell_position_SI = njit_inline(get_cell_position_SI)
calc_twts_Ex = njit_inline(calc_twts_Ex)
calc_twts_By = njit_inline(calc_twts_By)
calc_twts_Bz = njit_inline(calc_twts_Bz)

# Per-cell functions
# ------------------
# `twts_coefs` is the array (phiT, om0, tauG, rho0, wy, k, unit_length,
# unit_time) built by TWTSField, from get_twts_constants.

@njit_inline
def get_twts_position( i0, i1, i2, component, offsets, laser_origin,
                       cell_size_SI, phi, dim, swap_axes ):
    """
    Return the position (in meters, in the frame of the TWTS functions)
    of the field component `component` of the cell (i0, i1, i2)

    For 2D simulations, i2 is ignored and the returned x is 0.
    """
    p0 = get_cell_position_SI( i0, offsets[component, 0],
                               laser_origin[0], cell_size_SI[0] )
    p1 = get_cell_position_SI( i1, offsets[component, 1],
                               laser_origin[1], cell_size_SI[1] )
    if dim == 3:
        p2 = get_cell_position_SI( i2, offsets[component, 2],
                                   laser_origin[2], cell_size_SI[2] )
        return( rotate_position_3d( p0, p1, p2, phi ) )

    if swap_axes:
        p0, p1 = p1, p0
    y, z = rotate_position_2d( p0, p1, phi )
    return( 0., y, z )

@njit_inline
def evaluate_twts_Ex( x, y, z, time, twts_coefs ):
    """
    Ex of the TWTS pulse at the position x, y, z (in meters, in the frame
    of the TWTS functions) and at the time `time` (in seconds)
    """
    unit_length = twts_coefs[6]
    unit_time = twts_coefs[7]
    return( calc_twts_Ex( x/unit_length, y/unit_length, z/unit_length,
        time/unit_time, twts_coefs[0], twts_coefs[1], twts_coefs[2],
        twts_coefs[3], twts_coefs[4], twts_coefs[5] ) )

@njit_inline
def evaluate_twts_By( x, y, z, time, twts_coefs ):
    """
    By of the TWTS pulse (see evaluate_twts_Ex)
    """
    unit_length = twts_coefs[6]
    unit_time = twts_coefs[7]
    return( calc_twts_By( x/unit_length, y/unit_length, z/unit_length,
        time/unit_time, twts_coefs[0], twts_coefs[1], twts_coefs[2],
        twts_coefs[3], twts_coefs[4], twts_coefs[5] ) )

@njit_inline
def evaluate_twts_Bz( x, y, z, time, twts_coefs ):
    """
    Bz of the TWTS pulse (see evaluate_twts_Ex)
    """
    unit_length = twts_coefs[6]
    unit_time = twts_coefs[7]
    return( calc_twts_Bz( x/unit_length, y/unit_length, z/unit_length,
        time/unit_time, twts_coefs[0], twts_coefs[1], twts_coefs[2],
        twts_coefs[3], twts_coefs[4], twts_coefs[5] ) )

@njit_inline
def get_twts_E_cell( i0, i1, i2, time, phi, twts_coefs, offsets,
                     laser_origin, cell_size_SI, dim, e_component ):
    """
    Return the non-zero component of the TWTS E field in the cell
    (i0, i1, i2), i.e. Ex in 3D and Ez in 2D
    """
    x, y, z = get_twts_position( i0, i1, i2, e_component, offsets,
                        laser_origin, cell_size_SI, phi, dim, False )
    return( evaluate_twts_Ex( x, y, z, time, twts_coefs ) )

@njit_inline
def get_twts_B_cell( i0, i1, i2, time, phi, twts_coefs, offsets,
                     laser_origin, cell_size_SI, dim,
                     first_component, second_component, bz_sign, swap_axes ):
    """
    Return the two non-zero components of the TWTS B field in the cell
    (i0, i1, i2), i.e. (By, Bz) in 3D and (By, Bx) in 2D

    Both TWTS components are evaluated at the grid position of each of the
    two returned components, and then rotated back to the simulation frame.
    """
    # TWTS By and Bz, at the position of the first component
    x, y, z = get_twts_position( i0, i1, i2, first_component, offsets,
                        laser_origin, cell_size_SI, phi, dim, swap_axes )
    By_first = evaluate_twts_By( x, y, z, time, twts_coefs )
    Bz_first = bz_sign*evaluate_twts_Bz( x, y, z, time, twts_coefs )
    # TWTS By and Bz, at the position of the second component
    x, y, z = get_twts_position( i0, i1, i2, second_component, offsets,
                        laser_origin, cell_size_SI, phi, dim, swap_axes )
    By_second = evaluate_twts_By( x, y, z, time, twts_coefs )
    Bz_second = bz_sign*evaluate_twts_Bz( x, y, z, time, twts_coefs )
    # The positions were rotated before calling the TWTS functions:
    # rotate the resulting field vector back
    return( rotate_field_back( By_first, Bz_first,
                               By_second, Bz_second, phi ) )

# Kernels on a block of cells
# ---------------------------

@njit_parallel
def get_twts_E_on_grid_3d( E, start0, start1, start2, time, phi,
                           twts_coefs, offsets, laser_origin, cell_size_SI,
                           e_component, e_output ):
    """
    Fill the component `e_output` of the array E, of shape (3, N0, N1, N2),
    with the TWTS E field of the cells (start0+i0, start1+i1, start2+i2)
    """
    N0 = E.shape[1]
    N1 = E.shape[2]
    N2 = E.shape[3]
    # Loop over the cells (in parallel if threading is installed)
    for i0 in prange( N0 ):
        for i1 in range( N1 ):
            for i2 in range( N2 ):
                E[e_output, i0, i1, i2] = get_twts_E_cell(
                    start0 + i0, start1 + i1, start2 + i2, time, phi,
                    twts_coefs, offsets, laser_origin, cell_size_SI,
                    3, e_component )
    return( E )

@njit_parallel
def get_twts_E_on_grid_2d( E, start0, start1, time, phi,
                           twts_coefs, offsets, laser_origin, cell_size_SI,
                           e_component, e_output ):
    """
    Fill the component `e_output` of the array E, of shape (3, N0, N1),
    with the TWTS E field of the cells (start0+i0, start1+i1)
    """
    N0 = E.shape[1]
    N1 = E.shape[2]
    for i0 in prange( N0 ):
        for i1 in range( N1 ):
            E[e_output, i0, i1] = get_twts_E_cell(
                start0 + i0, start1 + i1, 0, time, phi,
                twts_coefs, offsets, laser_origin, cell_size_SI,
                2, e_component )
    return( E )

@njit_parallel
def get_twts_B_on_grid_3d( B, start0, start1, start2, time, phi,
                           twts_coefs, offsets, laser_origin, cell_size_SI,
                           first_component, second_component,
                           first_output, second_output, bz_sign, swap_axes ):
    """
    Fill the components `first_output` and `second_output` of the array B,
    of shape (3, N0, N1, N2), with the TWTS B field of the cells
    (start0+i0, start1+i1, start2+i2)
    """
    N0 = B.shape[1]
    N1 = B.shape[2]
    N2 = B.shape[3]
    for i0 in prange( N0 ):
        for i1 in range( N1 ):
            for i2 in range( N2 ):
                B_first, B_second = get_twts_B_cell(
                    start0 + i0, start1 + i1, start2 + i2, time, phi,
                    twts_coefs, offsets, laser_origin, cell_size_SI, 3,
                    first_component, second_component, bz_sign, swap_axes )
                B[first_output, i0, i1, i2] = B_first
                B[second_output, i0, i1, i2] = B_second
    return( B )

@njit_parallel
def get_twts_B_on_grid_2d( B, start0, start1, time, phi,
                           twts_coefs, offsets, laser_origin, cell_size_SI,
                           first_component, second_component,
                           first_output, second_output, bz_sign, swap_axes ):
    """
    Fill the components `first_output` and `second_output` of the array B,
    of shape (3, N0, N1), with the TWTS B field of the cells
    (start0+i0, start1+i1)
    """
    N0 = B.shape[1]
    N1 = B.shape[2]
    for i0 in prange( N0 ):
        for i1 in range( N1 ):
            B_first, B_second = get_twts_B_cell(
                start0 + i0, start1 + i1, 0, time, phi,
                twts_coefs, offsets, laser_origin, cell_size_SI, 2,
                first_component, second_component, bz_sign, swap_axes )
            B[first_output, i0, i1] = B_first
            B[second_output, i0, i1] = B_second
    return( B )
