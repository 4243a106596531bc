"""
Bravely - Exposure Therapy Progress Engine

This package provides the backend services for Bravely, a personal
exposure-therapy companion. Users log timed exposure sessions and the
engine turns that history into daily/weekly statistics, a bravery
streak, and goals that grow with the user.

NOTE: All progress values are re-derivable from stored session history.
"""

__version__ = "0.1.0"
__author__ = "Bravely Engineering Team"
