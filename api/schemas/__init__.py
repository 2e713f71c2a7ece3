"""
API Schemas - Pydantic models for request/response validation

These schemas define the contract between the API and the front end.
Catalog payloads (search results, movie details) are relayed as-is and
have no dedicated schema here.
"""
