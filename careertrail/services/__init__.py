"""Service layer: database-backed operations scoped to one user.

Services raise ``careertrail.errors`` exceptions; routers map them to HTTP.
"""
