"""auth/ -- Bearer token verification and caller identity for the TODO API.

Layer rule: auth/ imports only stdlib, third-party libraries, and core/.
It does NOT import from api/, web/, or todos/.
api/ imports from auth/, not the other way around.
"""
