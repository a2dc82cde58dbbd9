"""
Boundary layer.

Adapters to systems outside the process: the remote entity-record store.
"""
