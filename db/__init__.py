"""
db/ - Database Layer
====================
Handles the ClickHouse connection pool, SQL input sanitization, statement
building and statement execution.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
