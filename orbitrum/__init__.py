"""
Orbitrum token engine.

Pure policy functions over an account snapshot:
- cashback accrual from plan tenure
- withdrawal and consumption feasibility checks
- action eligibility gate (role, documents)
- wallet read model

plus a store-backed service that composes them and persists counter updates.
"""
