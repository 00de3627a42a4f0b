"""
Application layer for the hierarchy cascade API.

- exceptions: error taxonomy shared by services, adapters and routers
- ports: Protocol interfaces implemented by the infrastructure layer
"""
