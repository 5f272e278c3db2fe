"""
Services module for business logic separation.

- code_generator: random candidate short codes
- mapping_store: persistence of short code to URL mappings
- url_service: creation with collision retries, and resolution
"""
