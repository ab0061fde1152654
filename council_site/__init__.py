"""
Backend package for the student council website.

This package provides a FastAPI application that serves the static site,
relays the contact form to the senate mailbox, and lets the administrator
post news items and replace the published PDF documents in object storage.
"""
