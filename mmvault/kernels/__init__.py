"""
Kernel layer.

Deterministic, integer-only building blocks used by the vault core.
`mmvault/kernels/python/` holds the production Python kernels.
"""
