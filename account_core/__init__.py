"""
account-core: account, login and verification lifecycle for message-driven services.
"""

__version__ = "0.1.0"
