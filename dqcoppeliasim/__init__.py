"""Dual quaternions and a client layer for object poses and joint states in CoppeliaSim scenes."""

__version__ = "0.1.0"