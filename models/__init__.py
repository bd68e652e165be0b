"""
models/ - Typed Records
=======================
Dataclasses returned by the services. Each record fixes its field set and
nullability; ``to_dict()`` renders the field names the GUI expects.
"""
