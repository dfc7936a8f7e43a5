"""
Services Package

Business logic shared by the routers:
- validation.py: request validation and store error mapping
"""
