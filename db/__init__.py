"""
db/ - Database Layer
====================
Handles PostgreSQL connections, scoped transactions and row mapping.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
