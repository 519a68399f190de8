"""Vaccine appointment booking application.

Models, services, page views, JSON endpoints and route registrations for
patients, hospital administrators and site administrators.
"""
