"""
Contracts (data models).

This folder defines the shapes exchanged with the products API:
- Product records and their full field set

Why this exists:
- The catalog client, the local backup and the products API agree on one field set
- Backup writes complete every record instead of silently dropping fields
"""
