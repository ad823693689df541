"""
infrastructure - Concrete implementations of domain ports.

Contains all vendor-specific code: aiosqlite storage, reportlab rendering,
environment configuration.
Depends on domain/ only (implements ports). Never imported by application/.
"""
