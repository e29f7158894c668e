"""Petalburg - visual scene editor for Junebug game projects."""

__version__ = "0.1.0"
