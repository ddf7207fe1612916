"""
Core infrastructure: settings, logging, database migrations, security
helpers, access control rules and sample data.
"""
