#!/usr/bin/env python3
# =============================================================================
#     File: conftest.py
#  Created: 2026-10-19 11:20
#   Author: Bernie Roesler
#
"""
Configuration file for pytest to set up the testing environment.
"""
# =============================================================================

def pytest_addoption(parser):
    """Add command-line options for pytest."""
    parser.addoption(
        "--make-figures",
        action="store_true",
        default=False,
        help="Make and save figures for tests that generate plots."
    )


def pytest_configure(config):
    """Register the custom markers."""
    config.addinivalue_line(
        "markers",
        "random: tests on randomly generated separator trees."
    )

# =============================================================================
# =============================================================================
