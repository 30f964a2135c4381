"""
Application Layer

Use-case services orchestrating the domain over injected ports.
"""
