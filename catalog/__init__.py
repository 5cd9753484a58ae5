"""
Catalog: Products and categories tracked by Stockroom.

Operations live in stockroom.services.catalog (exported as stockroom.catalog)
because creating or deleting a product also touches its stock row.
"""
