"""
Back-office modules: per-area permission gates and lifecycle action states.

Each area (contracts, cari, cash, payroll) declares its capability ->
permission tables as immutable mappings and resolves them through the
shared kernel helpers.
"""
