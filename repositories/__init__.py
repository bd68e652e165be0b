"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive raw rows from the database and return typed records.

Read methods borrow their own cursor from the injected Database. Methods
that take a ``cur`` argument run inside a caller-owned transaction.
"""
