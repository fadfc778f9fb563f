"""Attendance Register package.

This package is organized by feature modules (catalog, attendance, roster, register, ...)
with a thin Flask controller layer over session/service/repository layers that talk to
the school platform API.
"""
