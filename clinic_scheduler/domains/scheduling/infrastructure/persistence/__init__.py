"""
Scheduling Persistence
"""
