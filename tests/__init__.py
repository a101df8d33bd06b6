"""
priosim test suite.

This package contains tests for:
- The binary-heap priority queue and its orderings
- Error types
- Request records and the event log codec
- The simulation driver and command-line entry point
"""
