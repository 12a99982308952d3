"""
Core infrastructure: configuration, logging, credentials, ABIs and providers.
"""
