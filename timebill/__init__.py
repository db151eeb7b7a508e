"""
Timebill backend.
Time tracking, invoicing and commission reporting for a consulting office.
"""

__version__ = "1.0.0"
