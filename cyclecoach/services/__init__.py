"""
Domain services: phase inference, question routing and response composition.
"""
