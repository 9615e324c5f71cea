"""Event Check-in package.

Organized by feature modules (registrants, checkins, importing, dashboard,
export) with a thin Flask controller layer over service/repository layers.
"""
