# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines the TWTSFieldE and TWTSFieldB classes, which return the
electric and magnetic fields of a TWTS laser pulse on the grid of a
2D or 3D simulation, for a given cell and timestep.
"""
import numpy as np
from twtsfield.parameters import LaserParameters
from twtsfield.grid import GridGeometry, get_laser_origin
from twtsfield.dimensions import get_dimension_layout
from twtsfield.time_delay import get_tdelay_SI, get_time_SI
from twtsfield.utils.printing import print_twts_setup
from .inline_functions import get_twts_constants
from .numba_methods import get_twts_position, get_twts_E_cell, \
    get_twts_B_cell, get_twts_E_on_grid_3d, get_twts_E_on_grid_2d, \
    get_twts_B_on_grid_3d, get_twts_B_on_grid_2d

class TWTSField( object ):
    """
    Base class for the TWTS field functors.

    All the quantities that do not depend on the cell and the timestep
    (time delay, laser origin, normalized constants of the TWTS formulas)
    are calculated once, at initialization. Calling the functor is then
    a pure function of the cell index and the timestep.
    """
    # Name of the field, used when printing the setup
    fieldtype = None

    def __init__( self, laser, grid, dtype=np.float64, verbose_level=1 ):
        """
        Initialize the TWTS field functor.

        Parameters
        ----------
        laser: a LaserParameters object
            The parameters of the TWTS laser pulse

        grid: a GridGeometry object
            The geometry of the simulation grid

        dtype: numpy floating-point type, optional
            The precision of the returned fields (np.float32 or np.float64).
            The positions and the analytic formulas are always evaluated in
            double precision.

        verbose_level: int, optional
            Level of detail of the information printed at initialization
            0 - Print no information
            1 (Default) - Print basic information
            2 - Print detailed information
        """
        if not isinstance( laser, LaserParameters ):
            raise ValueError('`laser` must be a LaserParameters object.')
        if not isinstance( grid, GridGeometry ):
            raise ValueError('`grid` must be a GridGeometry object.')
        try:
            valid_dtype = np.dtype( dtype ) in [ np.dtype(np.float32),
                                                 np.dtype(np.float64) ]
        except TypeError:
            valid_dtype = False
        if not valid_dtype:
            raise ValueError(
                '`dtype` must be np.float32 or np.float64 (got %s).' %(dtype,) )
        self.laser = laser
        self.grid = grid
        self.dtype = np.dtype(dtype)
        # Timestep, as used in the normalization of the TWTS formulas
        self.dt = grid.dt
        self.dim = grid.dim
        self.layout = get_dimension_layout( grid.dim )

        # Time delay of the pulse
        self.tdelay = get_tdelay_SI( laser.auto_tdelay, laser.tdelay_user_SI,
            grid.half_sim_size, grid.cell_size_SI, laser.pulselength_SI,
            laser.focus_y_SI, laser.phi, laser.beta_0, c=grid.c )

        # Origin of the laser coordinate system, in number of cells
        self.laser_origin = get_laser_origin( grid.half_sim_size,
                                laser.focus_y_SI, grid.cell_size_SI )
        self.laser_origin.flags.writeable = False

        # Normalized constants of the TWTS formulas
        phiT, om0, tauG, rho0, wy, k, unit_length = get_twts_constants(
            laser.phi, laser.beta_0, laser.wavelength_SI,
            laser.pulselength_SI, laser.w_x_SI, laser.w_y_SI, self.dt, grid.c)
        self.twts_coefs = np.array(
            [ phiT, om0, tauG, rho0, wy, k, unit_length, self.dt ],
            dtype=np.float64 )
        self.twts_coefs.flags.writeable = False

        # Print information about the field
        print_twts_setup( self, verbose_level=verbose_level )

    @property
    def offsets( self ):
        """Fractional positions of the field components within a cell"""
        raise NotImplementedError

    def get_time_SI( self, current_step ):
        """
        Return the time (in seconds) at which the fields are evaluated,
        at the timestep `current_step`
        """
        return( get_time_SI( current_step, self.dt, self.tdelay ) )

    def get_field_positions_SI( self, cell_idx ):
        """
        Return the positions (in meters) of the three field components
        of the cell `cell_idx`, in the rotated frame of the TWTS functions

        Parameters
        ----------
        cell_idx: sequence of 2 or 3 ints
            The index of the cell in the global simulation domain

        Returns
        -------
        positions: 2darray of shape (3, 3)
            The row i holds the TWTS (x, y, z) position of the i-th
            field component
        """
        i0, i1, i2 = self._unpack_cell_idx( cell_idx )
        positions = np.empty( (3, 3), dtype=np.float64 )
        for component in range(3):
            positions[component] = get_twts_position( i0, i1, i2,
                component, self.offsets, self.laser_origin,
                self.grid.cell_size_SI, self.laser.phi, self.dim,
                self._swap_axes )
        return( positions )

    def get_field_on_grid( self, current_step, shape=None, start=None ):
        """
        Return the field on a block of cells, at the timestep `current_step`

        The cells are evaluated in parallel, if threading is available.

        Parameters
        ----------
        current_step: int
            The current timestep of the simulation

        shape: sequence of 2 or 3 ints, optional
            The number of cells of the block along each axis.
            Default: the whole global simulation domain.

        start: sequence of 2 or 3 ints, optional
            The index of the first cell of the block. Default: 0 on each axis

        Returns
        -------
        field: ndarray of shape (3,) + shape, with the dtype of the functor
        """
        if shape is None:
            shape = self.grid.global_size
        if start is None:
            start = np.zeros( self.dim, dtype=np.int64 )
        shape = tuple( int(n) for n in shape )
        start = tuple( int(i) for i in start )
        if len(shape) != self.dim or len(start) != self.dim:
            raise ValueError(
                '`shape` and `start` must contain %d elements.' %self.dim )
        field = np.zeros( (3,) + shape, dtype=self.dtype )
        time = self.get_time_SI( current_step )
        self._fill_grid( field, start, time )
        return( field )

    def _unpack_cell_idx( self, cell_idx ):
        if self.dim == 3:
            return( int(cell_idx[0]), int(cell_idx[1]), int(cell_idx[2]) )
        else:
            return( int(cell_idx[0]), int(cell_idx[1]), 0 )


class TWTSFieldE( TWTSField ):
    """
    Electric field of a TWTS laser pulse.

    In 3D, the returned field is (Ex, 0, 0). In 2D, the TWTS Ex is
    evaluated at the grid position of Ez, and the returned field is
    (0, 0, Ez).
    """
    fieldtype = 'E'
    _swap_axes = False

    @property
    def offsets( self ):
        return( self.grid.e_field_positions )

    def __call__( self, cell_idx, current_step ):
        """
        Return the TWTS electric field, normalized to its peak amplitude

        Parameters
        ----------
        cell_idx: sequence of 2 or 3 ints
            The index of the cell in the global simulation domain
        current_step: int
            The current timestep of the simulation

        Returns
        -------
        E: 1darray of 3 floats
        """
        i0, i1, i2 = self._unpack_cell_idx( cell_idx )
        time = self.get_time_SI( current_step )
        E = np.zeros( 3, dtype=self.dtype )
        E[ self.layout.e_output ] = get_twts_E_cell( i0, i1, i2, time,
            self.laser.phi, self.twts_coefs, self.offsets, self.laser_origin,
            self.grid.cell_size_SI, self.dim, self.layout.e_component )
        return( E )

    def _fill_grid( self, E, start, time ):
        if self.dim == 3:
            get_twts_E_on_grid_3d( E, start[0], start[1], start[2], time,
                self.laser.phi, self.twts_coefs, self.offsets,
                self.laser_origin, self.grid.cell_size_SI,
                self.layout.e_component, self.layout.e_output )
        else:
            get_twts_E_on_grid_2d( E, start[0], start[1], time,
                self.laser.phi, self.twts_coefs, self.offsets,
                self.laser_origin, self.grid.cell_size_SI,
                self.layout.e_component, self.layout.e_output )


class TWTSFieldB( TWTSField ):
    """
    Magnetic field of a TWTS laser pulse.

    In 3D, the returned field is (0, By, Bz). In 2D, the TWTS Bz is mapped
    onto -Bx, and the returned field is (Bx, By, 0).
    """
    fieldtype = 'B'

    @property
    def offsets( self ):
        return( self.grid.b_field_positions )

    @property
    def _swap_axes( self ):
        return( self.layout.b_swap_axes )

    def __call__( self, cell_idx, current_step ):
        """
        Return the TWTS magnetic field, normalized to the peak amplitude
        of the electric field

        See the docstring of TWTSFieldE.__call__
        """
        i0, i1, i2 = self._unpack_cell_idx( cell_idx )
        time = self.get_time_SI( current_step )
        layout = self.layout
        B_first, B_second = get_twts_B_cell( i0, i1, i2, time,
            self.laser.phi, self.twts_coefs, self.offsets, self.laser_origin,
            self.grid.cell_size_SI, self.dim, layout.b_first_component,
            layout.b_second_component, layout.bz_sign, layout.b_swap_axes )
        B = np.zeros( 3, dtype=self.dtype )
        B[ layout.b_first_output ] = B_first
        B[ layout.b_second_output ] = B_second
        return( B )

    def _fill_grid( self, B, start, time ):
        layout = self.layout
        if self.dim == 3:
            get_twts_B_on_grid_3d( B, start[0], start[1], start[2], time,
                self.laser.phi, self.twts_coefs, self.offsets,
                self.laser_origin, self.grid.cell_size_SI,
                layout.b_first_component, layout.b_second_component,
                layout.b_first_output, layout.b_second_output,
                layout.bz_sign, layout.b_swap_axes )
        else:
            get_twts_B_on_grid_2d( B, start[0], start[1], time,
                self.laser.phi, self.twts_coefs, self.offsets,
                self.laser_origin, self.grid.cell_size_SI,
                layout.b_first_component, layout.b_second_component,
                layout.b_first_output, layout.b_second_output,
                layout.bz_sign, layout.b_swap_axes )
