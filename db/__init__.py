"""
db/ - Database Layer
====================
Connection pooling, schema provisioning and parameterized query execution
against PostgreSQL. This layer is the lowest in the architecture and only
depends on config and utils.
"""
