"""Keyportal: admin dashboard and self-service API key issuance.

Administrators register and log in to view every user and issued key.
End users register once and receive an API key that is shown exactly once.
"""

__version__ = "0.1.0"
