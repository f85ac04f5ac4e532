"""
Test suite for the custodyslip project.

This module contains all unit tests for the custodyslip package.
"""
