"""
SAS Export
==========

Converts the column catalog and rows of statistical data files into CSV
for bulk loading and SQL DDL for MySQL or PostgreSQL.
"""

__version__ = "1.0.0"
