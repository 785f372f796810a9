"""
Versioning Tests Package

TEST AXIOMS:
=============
1. Old data always reaches the current shape through every upgrade step
2. Newer data is rejected, never truncated
3. Failures surface as exceptions, never as half-populated records
"""
