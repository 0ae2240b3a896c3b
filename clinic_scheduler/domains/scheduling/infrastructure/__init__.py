"""
Scheduling Infrastructure Layer

SQLAlchemy persistence, repositories, unit of work and payment gateway.
"""
