"""
Data-access functions, one module per table.

Repository rules:
- Every function receives the Session explicitly
- Functions flush, but never commit
"""
