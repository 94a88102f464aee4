"""
ingress-store is a local cache of the cluster objects used by an ingress
controller, answering typed queries and deciding which ingresses the
controller manages.
"""

__all__ = [
    "config",
    "exceptions",
    "loader",
    "manifest",
    "store",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
