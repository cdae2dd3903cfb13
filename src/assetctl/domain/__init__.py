"""Domain layer — pure types and rules, no I/O beyond ``stat``.

Domain modules must never import from services, commands, output, or plugins.
"""
