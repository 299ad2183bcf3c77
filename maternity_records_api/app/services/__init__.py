"""
Service layer.

Each service encapsulates the logic for one concern of the data‑entry
workflow (catalog, routing, submissions, records, patients).  Services
receive the document store and the catalog in their constructor, so
handlers never touch persistence directly.
"""
