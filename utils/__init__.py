"""
utils/ - Shared Helpers
=======================
Logging setup and input validation used across layers.
"""
