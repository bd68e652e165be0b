"""
security/ - Credential Checks
=============================
Pluggable password comparison used by the login service.
"""
