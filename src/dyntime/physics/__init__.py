"""Astronomical time scale algorithms and the reference data they depend on."""
