"""Perspecta core: math, models, solver and sensor handling."""
