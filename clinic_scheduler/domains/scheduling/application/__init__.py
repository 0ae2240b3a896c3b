"""
Scheduling Application Layer

Ports, DTOs, application services and use cases.
"""
