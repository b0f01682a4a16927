# Schemas package init
"""
Wrapped Backend - Request/Response Schemas
============================================

    - common.py: shared base model, timestamp serialization, error/ok/health bodies
    - auth.py:   register/login bodies and user responses
    - wrap.py:   wrap/item bodies and responses

Request models describe what a client may send; response models control
exactly which columns leave the server (never the password hash).
"""
