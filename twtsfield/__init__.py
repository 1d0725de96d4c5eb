__version__ = '0.1.0'
__doc__ = """
Analytic background field of a Traveling-Wave Thomson-Scattering (TWTS)
laser pulse, for particle-in-cell codes.

Usage
-----
See the twtsfield.twts.TWTSFieldE and twtsfield.twts.TWTSFieldB classes,
which are set up from a twtsfield.parameters.LaserParameters and a
twtsfield.grid.GridGeometry object.
"""

# Change the default formatting for warnings within twtsfield
import warnings
def modified_formatting(message, category, filename, lineno, line=None):
    """Format a warning so that the code line `line` is not shown`."""
    return('\n%s: %s:%s:\n%s\n'%(category.__name__, filename, lineno, message))
warnings.formatwarning = modified_formatting
