# Services package init
"""
Wrapped Backend - Services Layer
==================================

Service Inventory:
    - AuthService: registration with conflict checks, credential checks, whoami
    - WrapService: owner-scoped wrap listing, creation, item appends, deletion

Services receive the request's AsyncSession and never touch HTTP objects.
"""
