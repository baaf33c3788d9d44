"""
Raydium pool index loader for Redis.
"""

__version__ = "0.1.0"
