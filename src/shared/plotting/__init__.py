"""Plotting utilities for simulation results."""
