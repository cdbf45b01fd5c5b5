"""Discrete-time simulation of a rehabilitation clinic's patient scheduling."""

__version__ = "0.1.0"