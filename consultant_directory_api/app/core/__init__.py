"""
Core infrastructure: configuration, logging, storage and error types.
"""
