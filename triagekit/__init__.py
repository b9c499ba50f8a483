"""Helpers for an issue and pull request triage bot: signatures, label filters, issue-body sections, notes, topics and a WSGI webhook endpoint."""

__version__ = "0.1.0"