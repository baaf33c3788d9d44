"""
Processing pipelines for the Raydium pool index.
"""
