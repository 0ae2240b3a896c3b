"""
Clinic Scheduler - appointment scheduling engine for multi-tenant dental clinics.
"""

__version__ = "1.0.0"
