"""
Scheduling Domain Layer

Entities, value objects and pure rules of the appointment scheduling engine.
"""
