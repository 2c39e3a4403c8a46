"""Gym Attendance package.

This package is organized by feature modules (attendance, subscriptions,
memberships, users) with a thin Flask controller layer over service/repository
layers.
"""
