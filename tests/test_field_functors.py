# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file tests the TWTS field functors TWTSFieldE and TWTSFieldB, which
are defined in twtsfield/twts/field_functors.py, in 2D and 3D:
- The value and position of the fields at the laser focus
- The consistency between the 2D and 3D fields
- The consistency between the evaluation on a block of cells
  (multithreaded kernels) and on individual cells

Usage :
from the top-level directory of twtsfield run
$ python tests/test_field_functors.py
"""
import math
import cmath
import pytest
import numpy as np
from scipy.constants import c
from twtsfield.parameters import LaserParameters
from twtsfield.grid import GridGeometry
from twtsfield.twts import TWTSFieldE, TWTSFieldB
from twtsfield.twts.inline_functions import get_twts_constants, \
    get_cell_position_SI, rotate_position_2d, rotate_field_back, \
    calc_twts_By, calc_twts_Bz

# Laser parameters
wavelength_SI = 0.8e-6
pulselength_SI = 5.e-15
w_x_SI = 5.e-6
w_y_SI = 5.e-6
# Grid parameters
dt = 2.e-8/c
dx = 0.1e-6
dy = 0.05e-6
dz = 0.1e-6
Nx = 32
Ny = 48
Nz = 24

sqrt2_2 = 0.5*math.sqrt(2.)

def make_laser( phi, focus_y_SI=0., beta_0=1., **kw ):
    return( LaserParameters( focus_y_SI, wavelength_SI, pulselength_SI,
                             w_x_SI, w_y_SI, phi=phi, beta_0=beta_0, **kw ) )

def make_grid( dim, **kw ):
    if dim == 3:
        return( GridGeometry( [Nx, Ny, Nz], [dx, dy, dz], dt, **kw ) )
    else:
        return( GridGeometry( [Nz, Ny], [dz, dy], dt, **kw ) )

def peak_step( field ):
    """Timestep at which the pulse crosses the laser origin"""
    return( int( round( field.tdelay/dt ) ) )

def test_fields_at_focus_3d():
    """At the focus and at t = 0, check the value of all the components"""
    zero = np.zeros((3, 3))
    grid = make_grid( 3, e_field_positions=zero, b_field_positions=zero )
    focus_cell = ( Nx//2, 0, Nz//2 )
    for phi in [ 0.5*math.pi, 1.2, 2.4 ]:
        laser = make_laser( phi, auto_tdelay=False, tdelay_user_SI=0. )
        E = TWTSFieldE( laser, grid, verbose_level=0 )( focus_cell, 0 )
        B = TWTSFieldB( laser, grid, verbose_level=0 )( focus_cell, 0 )
        assert E.dtype == np.float64
        assert np.allclose( E, [sqrt2_2, 0., 0.], rtol=1.e-12, atol=1.e-14 )
        assert np.allclose( B, [0., -math.sin(phi)*sqrt2_2,
                                -math.cos(phi)*sqrt2_2 ],
                            rtol=1.e-12, atol=1.e-14 )

def test_fields_at_focus_2d():
    """In 2D, E is along z and B is in the (x, y) plane"""
    zero = np.zeros((3, 2))
    grid = make_grid( 2, e_field_positions=zero, b_field_positions=zero )
    focus_cell = ( Nz//2, 0 )
    for phi in [ 0.5*math.pi, math.pi/3. ]:
        laser = make_laser( phi, auto_tdelay=False, tdelay_user_SI=0. )
        E = TWTSFieldE( laser, grid, verbose_level=0 )( focus_cell, 0 )
        B = TWTSFieldB( laser, grid, verbose_level=0 )( focus_cell, 0 )
        assert np.allclose( E, [0., 0., sqrt2_2], rtol=1.e-12, atol=1.e-14 )
        assert np.allclose( B, [ -math.cos(phi)*sqrt2_2,
                                 -math.sin(phi)*sqrt2_2, 0. ],
                            rtol=1.e-12, atol=1.e-14 )

def test_pulse_timing():
    """
    With the automatic time delay, the pulse is far from the laser origin
    at the first timestep, and crosses it after tdelay
    """
    zero = np.zeros((3, 3))
    grid = make_grid( 3, e_field_positions=zero )
    field = TWTSFieldE( make_laser( 0.5*math.pi ), grid, verbose_level=0 )
    focus_cell = ( Nx//2, 0, Nz//2 )
    assert abs( field( focus_cell, 0 )[0] ) < 0.05
    assert abs( field( focus_cell, peak_step(field) )[0] ) > 0.5
    assert field.get_time_SI( 0 ) == -field.tdelay


def test_golden_values_on_axis():
    """
    On the laser axis, compare the fields returned for a series of
    timesteps with the analytic Gaussian pulse
    (see tests/test_twts_formulas.py)
    """
    phi = 1.2
    zero = np.zeros((3, 3))
    grid = make_grid( 3, e_field_positions=zero, b_field_positions=zero )
    laser = make_laser( phi )
    field_E = TWTSFieldE( laser, grid, verbose_level=0 )
    field_B = TWTSFieldB( laser, grid, verbose_level=0 )
    phiT, om0, tauG, _, _, _, _ = get_twts_constants( phi, 1.,
        wavelength_SI, pulselength_SI, w_x_SI, w_y_SI, dt, c )
    focus_cell = ( Nx//2, 0, Nz//2 )
    n_peak = peak_step( field_E )
    for step in [ n_peak - 200, n_peak - 51, n_peak, n_peak + 33,
                  n_peak + 120 ]:
        t = field_E.get_time_SI( step )/dt
        envelope = cmath.exp( -t*t/(tauG*tauG) + 1j*om0*t ) \
            * cmath.exp( -0.25j*math.pi )
        Ex = envelope.real
        By = ( (1. + 2j*t/(om0*tauG*tauG))*envelope ).real
        Bz = ( 2j*math.tan(0.5*phiT)*t/(om0*tauG*tauG)*envelope ).real
        E = field_E( focus_cell, step )
        B = field_B( focus_cell, step )
        assert np.allclose( E, [Ex, 0., 0.], rtol=1.e-10, atol=1.e-12 )
        assert np.allclose( B, [ 0.,
            -math.sin(phi)*By + math.cos(phi)*Bz,
            -math.cos(phi)*By - math.sin(phi)*Bz ], rtol=1.e-10, atol=1.e-12 )

def test_field_positions():
    """Check the positions of the staggered components around the origin"""
    phi = 1.1
    sinPhi = math.sin(phi)
    cosPhi = math.cos(phi)
    laser = make_laser( phi, focus_y_SI=10*dy )
    # 3D, electric field
    field = TWTSFieldE( laser, make_grid(3), verbose_level=0 )
    positions = field.get_field_positions_SI( (Nx//2, 10, Nz//2) )
    assert np.allclose( positions, [
        [ 0.5*dx, 0., 0. ],
        [ 0., -sinPhi*0.5*dy, cosPhi*0.5*dy ],
        [ 0., -cosPhi*0.5*dz, -sinPhi*0.5*dz ] ], rtol=1.e-12, atol=1.e-20 )
    # 2D, magnetic field: the in-plane axes are swapped before the rotation
    field = TWTSFieldB( laser, make_grid(2), verbose_level=0 )
    positions = field.get_field_positions_SI( (Nz//2, 10) )
    assert np.allclose( positions[0],
        [ 0., -cosPhi*0.5*dy, -sinPhi*0.5*dy ], rtol=1.e-12, atol=1.e-20 )
    assert np.allclose( positions[1],
        [ 0., -sinPhi*0.5*dz, cosPhi*0.5*dz ], rtol=1.e-12, atol=1.e-20 )

def test_E_2d_3d_consistency():
    """
    The 2D electric field is the 3D one in the plane x = 0, when the
    2D grid spans the (z, y) plane of the 3D grid
    """
    laser = make_laser( 1.3, focus_y_SI=1.e-6 )
    positions_3d = np.array([ [0., 0.5, 0.25], [0., 0.5, 0.], [0., 0., 0.5] ])
    positions_2d = np.array([ [0.5, 0.], [0., 0.5], [0.25, 0.5] ])
    field_3d = TWTSFieldE( laser, make_grid( 3,
        e_field_positions=positions_3d ), verbose_level=0 )
    field_2d = TWTSFieldE( laser, make_grid( 2,
        e_field_positions=positions_2d ), verbose_level=0 )
    assert field_3d.tdelay == field_2d.tdelay
    n_peak = peak_step( field_3d )
    for step in [ n_peak - 40, n_peak, n_peak + 25 ]:
        for iy in [ 0, 17, 30 ]:
            for iz in [ 3, 12, 20 ]:
                E_3d = field_3d( (Nx//2, iy, iz), step )
                E_2d = field_2d( (iz, iy), step )
                assert np.allclose( E_2d, [0., 0., E_3d[0]],
                                    rtol=1.e-13, atol=1.e-15 )

def test_B_2d_composition():
    """
    Compare the 2D magnetic field with a step-by-step evaluation of the
    TWTS functions (swap and rotation of the positions, -Bz mapped on Bx,
    rotation of the field back into the simulation frame)
    """
    phi = 1.3
    laser = make_laser( phi, focus_y_SI=0.5e-6 )
    grid = make_grid( 2 )
    field = TWTSFieldB( laser, grid, verbose_level=0 )
    phiT, om0, tauG, rho0, wy, k, unit_length = get_twts_constants( phi,
        1., wavelength_SI, pulselength_SI, w_x_SI, w_y_SI, dt, c )
    offsets = grid.b_field_positions
    origin = field.laser_origin
    step = peak_step( field ) + 10
    t = field.get_time_SI( step )/dt

    for i0, i1 in [ (12, 10), (5, 3), (20, 31) ]:
        By = []
        Bz = []
        for component in [ 1, 0 ]:
            p0 = get_cell_position_SI( i0, offsets[component, 0],
                                       origin[0], dz )
            p1 = get_cell_position_SI( i1, offsets[component, 1],
                                       origin[1], dy )
            y, z = rotate_position_2d( p1, p0, phi )
            y = y/unit_length
            z = z/unit_length
            By.append( calc_twts_By( 0., y, z, t,
                                     phiT, om0, tauG, rho0, wy, k ) )
            Bz.append( -calc_twts_Bz( 0., y, z, t,
                                      phiT, om0, tauG, rho0, wy, k ) )
        By_sim, Bx_sim = rotate_field_back( By[0], Bz[0], By[1], Bz[1], phi )
        B = field( (i0, i1), step )
        assert np.allclose( B, [Bx_sim, By_sim, 0.], rtol=1.e-10, atol=1.e-13 )

@pytest.mark.parametrize( 'field_class', [ TWTSFieldE, TWTSFieldB ] )
def test_grid_matches_cells_3d( field_class ):
    """The multithreaded evaluation on a block matches the per-cell one"""
    field = field_class( make_laser( 1.4 ), make_grid(3), verbose_level=0 )
    step = peak_step( field ) + 7
    start = ( 13, 2, 10 )
    shape = ( 6, 8, 5 )
    F = field.get_field_on_grid( step, shape=shape, start=start )
    assert F.shape == (3,) + shape
    assert F.dtype == np.float64
    for i0 in range( shape[0] ):
        for i1 in range( shape[1] ):
            for i2 in range( shape[2] ):
                F_cell = field( (start[0] + i0, start[1] + i1,
                                 start[2] + i2), step )
                assert np.allclose( F[:, i0, i1, i2], F_cell,
                                    rtol=1.e-12, atol=1.e-15 )

@pytest.mark.parametrize( 'field_class', [ TWTSFieldE, TWTSFieldB ] )
def test_grid_matches_cells_2d( field_class ):
    """Same as above in 2D, on the whole simulation domain"""
    grid = GridGeometry( [16, 20], [dz, dy], dt )
    field = field_class( make_laser( 0.5*math.pi ), grid, verbose_level=0 )
    step = peak_step( field ) - 5
    F = field.get_field_on_grid( step )
    assert F.shape == (3, 16, 20)
    for i0 in range( 16 ):
        for i1 in range( 20 ):
            assert np.allclose( F[:, i0, i1], field( (i0, i1), step ),
                                rtol=1.e-12, atol=1.e-15 )

def test_single_precision():
    """The fields can be returned in single precision"""
    laser = make_laser( 1.2 )
    grid = make_grid( 3 )
    for field_class in [ TWTSFieldE, TWTSFieldB ]:
        field_64 = field_class( laser, grid, verbose_level=0 )
        field_32 = field_class( laser, grid, dtype=np.float32,
                                verbose_level=0 )
        step = peak_step( field_64 )
        F_64 = field_64( (Nx//2, 3, Nz//2 + 1), step )
        F_32 = field_32( (Nx//2, 3, Nz//2 + 1), step )
        assert F_32.dtype == np.float32
        assert np.allclose( F_32, F_64, rtol=1.e-6, atol=1.e-7 )
        F_grid = field_32.get_field_on_grid( step, shape=(2, 2, 2),
                                             start=(Nx//2, 3, Nz//2) )
        assert F_grid.dtype == np.float32

def test_singular_tilt():
    """For a tilt of 0, the fields are not finite but no error is raised"""
    with pytest.warns( UserWarning ):
        laser = make_laser( 0. )
    grid = make_grid( 3 )
    E = TWTSFieldE( laser, grid, verbose_level=0 )( (Nx//2, 5, 3), 100 )
    B = TWTSFieldB( laser, grid, verbose_level=0 )( (Nx//2, 5, 3), 100 )
    assert not np.isfinite( E[0] )
    assert not np.all( np.isfinite( B ) )

def test_invalid_arguments():
    laser = make_laser( 1.2 )
    grid = make_grid( 3 )
    with pytest.raises( ValueError ):
        TWTSFieldE( (1., 2.), grid, verbose_level=0 )
    with pytest.raises( ValueError ):
        TWTSFieldB( laser, None, verbose_level=0 )
    with pytest.raises( ValueError ):
        TWTSFieldE( laser, grid, dtype=np.int32, verbose_level=0 )
    with pytest.raises( ValueError ):
        TWTSFieldE( laser, grid, dtype='not_a_dtype', verbose_level=0 )
    field = TWTSFieldE( laser, grid, verbose_level=0 )
    with pytest.raises( ValueError ):
        field.get_field_on_grid( 0, shape=(2, 2) )

def test_print_setup( capsys ):
    laser = make_laser( 1.2 )
    TWTSFieldB( laser, make_grid(2), verbose_level=2 )
    out = capsys.readouterr().out
    assert 'TWTS B-field background, 2D simulation' in out
    assert 'Time delay (auto)' in out
    assert 'Laser origin' in out
    TWTSFieldE( laser, make_grid(2), verbose_level=0 )
    assert capsys.readouterr().out == ''
    # The tilt angle is printed in [-180, 180] degrees
    laser = make_laser( -0.7, auto_tdelay=False, tdelay_user_SI=2.e-14 )
    TWTSFieldE( laser, make_grid(2), verbose_level=2 )
    out = capsys.readouterr().out
    assert 'Pulse-front tilt phiT: -40.1070 deg' in out
    assert 'Time delay (user)' in out

def test_timestep_captured():
    """The functor keeps the timestep of the grid it was created with"""
    grid = make_grid( 3 )
    field = TWTSFieldE( make_laser( 1.2 ), grid, verbose_level=0 )
    assert field.dt == grid.dt
    assert field.twts_coefs[7] == grid.dt
    assert field.get_time_SI( 10 ) == 10*grid.dt - field.tdelay

if __name__ == '__main__' :

    test_fields_at_focus_3d()
    test_fields_at_focus_2d()
    test_pulse_timing()
    test_golden_values_on_axis()
    test_field_positions()
    test_E_2d_3d_consistency()
    test_B_2d_composition()
    for field_class in [ TWTSFieldE, TWTSFieldB ]:
        test_grid_matches_cells_3d( field_class )
        test_grid_matches_cells_2d( field_class )
    test_single_precision()
    test_singular_tilt()
    test_invalid_arguments()
    test_timestep_captured()
