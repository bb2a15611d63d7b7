"""
Utilities Package.

Logging and console helpers shared by the build hooks.
"""
