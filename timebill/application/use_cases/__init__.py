"""
Application use cases.
"""
