"""Simulation package shim.

This module exposes the Simulation class at `vmsim.simulation` so
imports such as `from vmsim.simulation import Simulation` work.
"""
from .simulation import Simulation

__all__ = ["Simulation"]
