"""
Service layer.

Each service wraps the SQL for one entity and enforces the rules the
database does not: input validation, existence checks before writes
and translation of constraint failures into typed errors.  Every
method receives the connection to work on from its caller.
"""
