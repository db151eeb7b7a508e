"""
Data Transfer Objects for the HTTP boundary.
"""
