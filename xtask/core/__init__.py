"""
xtask core
Process spawning, error types and the cargo task set
"""
