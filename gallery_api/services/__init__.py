"""
Domain services
"""
