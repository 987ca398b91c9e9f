"""
Release Stats - per-organization statistics over code.json software releases

Loads government software release records, groups them by organization,
computes release counts, labor hours, production status, licenses and
most active months, and serves the result as JSON or CSV.
"""

__version__ = "0.1.0"
__author__ = "Release Stats Team"
