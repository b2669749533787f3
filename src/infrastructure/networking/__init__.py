"""
Networking Infrastructure

Network communication components:
- http: REST transport, request/response structures and nonce sources
"""
