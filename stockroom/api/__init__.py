"""
Stockroom HTTP API (Django REST framework).

Mounted under /api/stock/ by the project urls.
"""
