"""
Solver module for quadratic constant-term recovery.

This module provides the arbitrary-base digit decoder and the Cramer's-rule
coefficient solver that turn raw (index, base, value) entries into the
constant term c of f(x) = a*x^2 + b*x + c.
"""
