"""Registry federation service.

Federates a read-only key/secret registry into the local identity store:
accounts known only to the registry are promoted to local accounts on their
first successful login, or imported in bulk by a synchronization run.
"""

__version__ = "0.1.0"
