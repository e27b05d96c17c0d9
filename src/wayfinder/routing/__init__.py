"""Routing — ordered per-method route tables with first-match-wins resolution.

Routes are registered during setup, compiled when constructed, and the
table is then consulted read-only for every request.
"""
