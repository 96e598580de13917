"""
Client for the product catalog API and the state behind its pages.
"""

from .api_service import ApiError, ApiService
from .listing import SortField, SortOrder, filter_and_sort_products
