"""Kickstart API package.

A small CRUD service covering users, audited records, paginated listings,
daily statistic rollups and queued email notifications.
"""
