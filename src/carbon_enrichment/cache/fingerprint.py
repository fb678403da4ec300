"""
Cache key derivation for products.
"""

from carbon_enrichment.models.product import ProductInput


def product_fingerprint(product: ProductInput) -> str:
    """
    Build the cache key of a product.
    
    Format: "{id}-{title}-{detail values joined by '-'}", detail values in
    mapping order. The identifier is part of the key, so two different
    products sharing a title and details do not collide.
    
    Examples:
        >>> product_fingerprint(ProductInput(id="B01", title="Mug", details={"material": "Ceramic"}))
        'B01-Mug-Ceramic'
    """
    return "-".join([product.id, product.title, "-".join(product.details.values())])
