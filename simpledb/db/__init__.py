"""
db/ - Database Layer
====================
Connection handling, dialects, SQL statement builders and the SimpleDB
facade that executes them. The statement builders have no dependencies on
a live connection.
"""
