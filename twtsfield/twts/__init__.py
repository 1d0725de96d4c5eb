"""
This file is part of twtsfield, the analytic TWTS background-field generator.
It imports the TWTS field functors.
"""
from .field_functors import TWTSFieldE, TWTSFieldB

__all__ = ['TWTSFieldE', 'TWTSFieldB']
