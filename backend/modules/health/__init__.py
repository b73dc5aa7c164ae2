"""
Health module: liveness/database check and the API entry listing.
"""
