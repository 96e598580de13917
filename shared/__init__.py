"""
Helpers shared by the catalog service and client.
"""
