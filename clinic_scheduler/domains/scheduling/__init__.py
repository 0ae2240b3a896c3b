"""
Scheduling Domain

Appointment lifecycle, conflict detection and plan capacity for clinics.
"""
