"""
handlers/ - Presentation Layer
================================
Discord gateway event handlers. Each handler receives an event from Discord,
applies the security guards, and delegates to the appropriate Service.
No business logic lives here.
"""
