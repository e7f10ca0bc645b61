"""HTTP API for the Inventory Classification Engine."""
