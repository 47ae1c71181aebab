"""
Campus Events - in-memory event management core

This package contains the event store, the reporting and ranking engine,
and the filtered/sorted event views used by the admin and student screens.
"""

__version__ = "0.1.0"
