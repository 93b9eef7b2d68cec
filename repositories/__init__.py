"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories run statements through the QueryExecutor and return domain model objects.
"""
