"""Time scales, calendar dates, and the conversions between them.

The public entry points are re-exported by the top-level :mod:`dyntime` package. This package is
kept free of imports so that the EOP loaders can reach the table helpers without a cycle.
"""
