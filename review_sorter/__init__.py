"""
Shopify Review Sorter

Modules:
    models      - Data models (RawProduct, RatedProduct, ProductPrice, ProductImage)
    common      - Shared utilities (config loader, logging setup)
    shopify     - Admin API client and catalog queries
    ratings     - Rating extraction, ordering and the page-view pipeline
    admin       - Admin panel rendering and local HTTP server
    segments    - Customer segmentation template
"""
