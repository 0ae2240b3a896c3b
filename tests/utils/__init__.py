"""
Test utilities: in-memory port fakes and entity builders.
"""
