"""
Inventory catalog service.

HTTP service to:
- Register, list, update and delete inventory items
- Attach and replace one photo per item (stored in a cache directory)
- Look up an item by id, optionally annotated with its photo URL
"""
