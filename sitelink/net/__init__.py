"""Module __init__: cookie, header and URL plumbing plus the SiteClient built on them."""
