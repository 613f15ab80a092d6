"""
Shared service utilities.

- http.py - requests session factory with default timeout and no retries
"""
