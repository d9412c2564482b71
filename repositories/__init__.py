"""
repositories/ - Data Access Layer
==================================
Repositories turn caller-supplied table names, rows and conditions into safe
statements and run them through the database layer, returning Records.
"""
