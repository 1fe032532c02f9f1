"""
Real HTTP integration clients.

These clients communicate with the products API over HTTP.

Important:
- Must return data shaped according to eyewear_catalog/integrations/contracts/*
- Must raise the CatalogApiError family so CatalogService can fall back to the backup
"""
