"""
Record access layer for the work-order, timesheet and passdown screens.

Feature code reads and writes records through RecordService, which talks to
the remote entity Web API when a client is available and to an in-process
mock otherwise.
"""

__version__ = "0.1.0"
