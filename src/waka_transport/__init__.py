"""Waka Eastern Bay community transport booking API.

This package is organized by feature modules (users, staffs, bookings, rosters, ...)
with a thin Flask controller layer over service/repository layers, plus a
daily booking reminder scheduler.
"""
