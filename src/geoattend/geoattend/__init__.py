"""GeoAttend package.

Organized by feature modules (sessions, attendance) with a thin Flask
controller layer over service/repository layers.
"""
