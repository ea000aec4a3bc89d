"""
Identity: password hashing, sessions, authentication and the authorization gate.
"""
