"""
models/ - Domain Models
=======================
Tagged values, statements, conditions and result records.
"""
