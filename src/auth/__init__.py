"""
Authentication module for the clinic records API.

This module provides:
- Identity registration with salted password hashes
- Login and JWT issuance
- The request gate that resolves the calling identity from the token header
"""
