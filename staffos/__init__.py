"""StaffOS — async client and command line for the StaffOS people-operations API."""

__version__ = "2.0.0"
