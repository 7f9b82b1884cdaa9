"""
User Management - desktop CRUD client for the Users REST API.

List, create, edit and delete user records against a remote service.
"""

__version__ = "1.0.0"
