"""Minisúper staff manager.

Feature modules (employees, schedules, vacations, extras, users, reports)
each carry a thin Flask controller over service and repository layers.
"""
