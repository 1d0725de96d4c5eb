# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines the GridGeometry object, which describes the simulation grid
on which the TWTS fields are evaluated, as well as the staggering of the
field components on a Yee cell.
"""
import numpy as np
from scipy.constants import c

def yee_e_field_positions( dim ):
    """
    Return the fractional positions of Ex, Ey and Ez within a Yee cell

    Parameters
    ----------
    dim: int
        Dimensionality of the simulation (2 or 3)

    Returns
    -------
    A 2darray of shape (3, dim), where the row i holds the position of
    the i-th field component (in units of the cell size)
    """
    if dim == 3:
        positions = [ [ 0.5, 0. , 0.  ],
                      [ 0. , 0.5, 0.  ],
                      [ 0. , 0. , 0.5 ] ]
    elif dim == 2:
        positions = [ [ 0.5, 0.  ],
                      [ 0. , 0.5 ],
                      [ 0. , 0.  ] ]
    else:
        raise ValueError('Unsupported dimensionality: %s' %dim)
    return( np.array( positions, dtype=np.float64 ) )

def yee_b_field_positions( dim ):
    """
    Return the fractional positions of Bx, By and Bz within a Yee cell

    See the docstring of yee_e_field_positions
    """
    if dim == 3:
        positions = [ [ 0. , 0.5, 0.5 ],
                      [ 0.5, 0. , 0.5 ],
                      [ 0.5, 0.5, 0.  ] ]
    elif dim == 2:
        positions = [ [ 0. , 0.5 ],
                      [ 0.5, 0.  ],
                      [ 0.5, 0.5 ] ]
    else:
        raise ValueError('Unsupported dimensionality: %s' %dim)
    return( np.array( positions, dtype=np.float64 ) )


class GridGeometry( object ):
    """
    Read-only description of the simulation grid, as supplied by the
    simulation code in which the TWTS fields are used.
    """
    __slots__ = ( 'dim', 'global_size', 'half_sim_size', 'cell_size',
                  'unit_length', 'cell_size_SI', 'dt', 'c',
                  'e_field_positions', 'b_field_positions', '_initialized' )

    def __init__( self, global_size, cell_size, dt, unit_length=1.,
                  c=c, e_field_positions=None, b_field_positions=None ):
        """
        Define the geometry of the simulation grid.

        Parameters
        ----------
        global_size: sequence of 2 or 3 ints
            Number of cells of the global simulation domain, along
            (x, y) in 2D or (x, y, z) in 3D. The y axis is the direction
            of the sliding window.

        cell_size: sequence of 2 or 3 floats (in units of `unit_length`)
            The size of a cell along each axis.

        dt: float (in second)
            The timestep of the simulation.

        unit_length: float (in meter), optional
            Conversion factor from the length unit of `cell_size`
            to meters. Default: 1 (i.e. `cell_size` is in meters).

        c: float (in meter/second), optional
            The speed of light. Default: scipy.constants.c

        e_field_positions, b_field_positions: 2darrays of shape (3, dim)
            The fractional positions of the field components within a cell.
            Default: the positions of the standard Yee cell.
        """
        global_size = np.array( global_size, dtype=np.int64 )
        if global_size.ndim != 1 or len(global_size) not in [2, 3]:
            raise ValueError(
                '`global_size` must contain 2 or 3 elements (got %s).'
                %(global_size,) )
        if np.any( global_size <= 0 ):
            raise ValueError(
                '`global_size` must be strictly positive (got %s).'
                %(global_size,) )
        self.dim = len(global_size)

        cell_size = np.array( cell_size, dtype=np.float64 )
        if cell_size.shape != (self.dim,):
            raise ValueError(
                '`cell_size` must contain %d elements (got %s).'
                %(self.dim, cell_size) )
        if not np.all( cell_size > 0 ):
            raise ValueError(
                '`cell_size` must be strictly positive (got %s).' %cell_size)
        for name, value in [ ('dt', dt), ('unit_length', unit_length),
                             ('c', c) ]:
            if not (value > 0):
                raise ValueError(
                    '`%s` must be strictly positive (got %s).' %(name, value))

        # Register the grid quantities
        self.global_size = global_size
        # Center of the global simulation volume, in number of cells
        self.half_sim_size = global_size // 2
        self.cell_size = cell_size
        self.unit_length = float(unit_length)
        self.cell_size_SI = cell_size * self.unit_length
        self.dt = float(dt)
        self.c = float(c)

        # Staggering of the field components
        if e_field_positions is None:
            e_field_positions = yee_e_field_positions( self.dim )
        if b_field_positions is None:
            b_field_positions = yee_b_field_positions( self.dim )
        self.e_field_positions = self._check_positions(
            e_field_positions, 'e_field_positions' )
        self.b_field_positions = self._check_positions(
            b_field_positions, 'b_field_positions' )

        # Prevent any later modification of the arrays
        for array in [ self.global_size, self.half_sim_size, self.cell_size,
                       self.cell_size_SI, self.e_field_positions,
                       self.b_field_positions ]:
            array.flags.writeable = False
        self._initialized = True

    def __setattr__( self, name, value ):
        if getattr( self, '_initialized', False ):
            raise AttributeError(
                'GridGeometry is read-only: `%s` cannot be modified.' %name )
        object.__setattr__( self, name, value )

    def __delattr__( self, name ):
        raise AttributeError(
            'GridGeometry is read-only: `%s` cannot be deleted.' %name )

    def _check_positions( self, positions, name ):
        positions = np.array( positions, dtype=np.float64 )
        if positions.shape != (3, self.dim):
            raise ValueError( '`%s` must be of shape (3, %d) (got %s).'
                              %(name, self.dim, positions.shape) )
        return( positions )


def get_laser_origin( half_sim_size, focus_y_SI, cell_size_SI ):
    """
    Return the origin of the TWTS laser coordinate system, in number of cells

    The origin is centered transversally in the simulation volume, and
    defined longitudinally (along y) by the position of the laser focus.

    Parameters
    ----------
    half_sim_size: 1darray of ints
        Center of the simulation volume, in number of cells
    focus_y_SI: float (in meter)
        Position of the laser focus along y
    cell_size_SI: 1darray of floats (in meter)
        Size of the cells along each axis

    Returns
    -------
    laser_origin: 1darray of floats
    """
    laser_origin = np.array( half_sim_size, dtype=np.float64 )
    laser_origin[1] = focus_y_SI / cell_size_SI[1]
    return( laser_origin )
