"""
Infrastructure Components

Foundational services shared by exchange integrations:
- networking: HTTP transport, signed request structures and nonce sources
- logging: structured logging with metrics
- exceptions: system-wide exception definitions
"""
