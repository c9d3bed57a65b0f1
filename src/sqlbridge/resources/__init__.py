"""Connector artifacts shipped with the distribution.

Files placed here are addressed with ``DriverPath=resource:<file name>``.
"""
