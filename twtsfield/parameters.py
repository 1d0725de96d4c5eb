# Copyright 2026, TWTSFIELD contributors
# License: 3-Clause-BSD-LBNL
"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It defines the LaserParameters object, which holds (and checks) the
physical parameters of the TWTS laser pulse.
"""
import math
import warnings
from collections import namedtuple

# Deviation of beta_0 from 1 beyond which the TWTS model is outside
# of the regime it was designed for
beta_0_tolerance = 0.1

_LaserParametersBase = namedtuple( '_LaserParametersBase',
    ['focus_y_SI', 'wavelength_SI', 'pulselength_SI', 'w_x_SI', 'w_y_SI',
     'phi', 'beta_0', 'tdelay_user_SI', 'auto_tdelay'] )

class LaserParameters( _LaserParametersBase ):
    """
    Immutable set of parameters of a TWTS laser pulse.

    The parameters are checked once, when the object is created, so that
    invalid values never reach the field evaluation.
    """
    __slots__ = ()

    def __new__( cls, focus_y_SI, wavelength_SI, pulselength_SI,
                 w_x_SI, w_y_SI, phi=0.5*math.pi, beta_0=1.,
                 tdelay_user_SI=0., auto_tdelay=True ):
        """
        Define the parameters of a TWTS laser pulse.

        Parameters
        ----------
        focus_y_SI: float (in meter)
            Distance of the laser focus from the origin of the simulation,
            along y (the direction of the sliding window).

        wavelength_SI: float (in meter)
            The central wavelength of the laser.

        pulselength_SI: float (in second)
            The duration of the laser, defined as the sigma of the
            standard Gaussian of the intensity (E^2).

        w_x_SI: float (in meter)
            The waist of the laser along x, at focus.

        w_y_SI: float (in meter)
            The width of the laser along y (the line focus of the TWTS pulse)

        phi: float (in radian), optional
            The interaction angle between the laser propagation direction
            and the y axis. Must be in ]-pi, pi]. Default: pi/2.

        beta_0: float (dimensionless), optional
            The propagation speed of the overlap region, normalized to
            the speed of light. Default: 1.

        tdelay_user_SI: float (in second), optional
            The time delay used when `auto_tdelay` is False.

        auto_tdelay: bool, optional
            Whether to calculate the time delay automatically, so that the
            pulse is not inside the simulation volume at timestep 0.
        """
        # Check the physical parameters
        # (written as `not (x > 0)` so that NaN values are rejected too)
        for name, value in [ ('wavelength_SI', wavelength_SI),
                             ('pulselength_SI', pulselength_SI),
                             ('w_x_SI', w_x_SI), ('w_y_SI', w_y_SI),
                             ('beta_0', beta_0) ]:
            if not (value > 0):
                raise ValueError(
                    'Invalid TWTS laser parameter: `%s` must be strictly '
                    'positive (got %s).' %(name, value) )
        if not (-math.pi < phi <= math.pi):
            raise ValueError(
                'Invalid TWTS laser parameter: `phi` must be in ]-pi, pi] '
                '(got %s).' %phi )
        if not math.isfinite( focus_y_SI ):
            raise ValueError(
                'Invalid TWTS laser parameter: `focus_y_SI` must be finite '
                '(got %s).' %focus_y_SI )
        if (not auto_tdelay) and (not math.isfinite( tdelay_user_SI )):
            raise ValueError(
                'Invalid TWTS laser parameter: `tdelay_user_SI` must be '
                'finite (got %s).' %tdelay_user_SI )

        self = _LaserParametersBase.__new__( cls,
            float(focus_y_SI), float(wavelength_SI), float(pulselength_SI),
            float(w_x_SI), float(w_y_SI), float(phi), float(beta_0),
            float(tdelay_user_SI), bool(auto_tdelay) )

        # Soft checks: the fields can still be calculated
        if abs( self.beta_0 - 1. ) > beta_0_tolerance:
            warnings.warn(
                'The TWTS pulse is designed for beta_0 close to 1 '
                '(got beta_0 = %s).\nThe dispersion of the pulse will '
                'deviate from the ideal TWTS pulse.' %self.beta_0 )
        if math.sin( self.phi_tilt ) == 0.:
            warnings.warn(
                'The pulse-front tilt angle of the TWTS pulse is singular '
                '(phi = %s, beta_0 = %s).\nThe analytic fields will be '
                'NaN or infinite.' %(self.phi, self.beta_0) )

        return( self )

    @property
    def phi_tilt( self ):
        """
        Effective pulse-front tilt angle phiT of the TWTS model
        (equal to phi for beta_0 = 1)
        """
        return( get_tilt_angle( self.phi, self.beta_0 ) )

    @classmethod
    def _make( cls, iterable ):
        """Create a LaserParameters object from a sequence, with all the checks"""
        return( cls( *iterable ) )

    def _replace( self, **kwargs ):
        """
        Return a copy of the parameters where the fields given in `kwargs`
        are replaced. The new parameters are checked as in `__new__`.
        """
        parameters = self._asdict()
        parameters.update( kwargs )
        return( type(self)( **parameters ) )

    @property
    def eta( self ):
        """
        Approximate angle between the pulse front and the y axis
        (exact for beta_0 = 1)
        """
        return( 0.5*math.pi - 0.5*self.phi )


def get_tilt_angle( phi, beta_0 ):
    """
    Return the pulse-front tilt angle phiT that enters the TWTS formulas.

    For beta_0 != 1, phi only determines the pulse-front tilt and
    dispersion of the pulse in the TWTS coordinate system, hence phiT
    differs from phi.

    The angle is returned in [-pi, pi].
    """
    alphaTilt = math.atan2( 1. - beta_0*math.cos(phi), beta_0*math.sin(phi) )
    # For phi < 0, 2*alphaTilt lies in ]pi, 2*pi[
    return( math.remainder( 2.*alphaTilt, 2.*math.pi ) )
