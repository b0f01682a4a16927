# Security package init
"""
Wrapped Backend - Security Primitives
=======================================

    - passwords.py: bcrypt hashing and verification
    - sessions.py:  signed, time-limited session tokens (PyJWT)

Both wrap a single library call; nothing here touches HTTP or the database.
"""
