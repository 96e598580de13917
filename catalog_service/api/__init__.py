"""
API Gateway handlers for the product catalog.
"""
