"""Command line tool for ingress-store."""
