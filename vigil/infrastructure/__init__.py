"""Infrastructure layer - Adapters and external integrations.

Structure:
- persistence/: In-memory principal and security event stores
- cache/: IP reputation cache adapters (in-memory, Redis)
- security/: bcrypt, TOTP (pyotp) and continuation tokens (PyJWT)
- enrichers/: GeoIP2 geolocation and user-agent classification
- notifications/: Notification sender adapters
- logging/: structlog console adapter

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
